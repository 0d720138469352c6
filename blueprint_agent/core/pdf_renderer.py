"""PDF rendering of blueprint text with reportlab."""

import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from blueprint_agent.core.blueprint_blocks import (
    Block,
    BlockClassifier,
    BlockKind,
    MarkdownClassifier,
    classify_blueprint,
)

DOCUMENT_TITLE = "Website Blueprint"
CALL_TO_ACTION = "Call to Action: Contact me to get started!"
BULLET_GLYPH = "•"
PAGE_MARGIN = 40

_TEXT_COLOR = colors.HexColor("#333333")

_BODY = ParagraphStyle(
    name="BlueprintBody",
    fontName="Helvetica",
    fontSize=12,
    leading=16,
    spaceAfter=3,
    textColor=_TEXT_COLOR,
)

STYLES: dict[BlockKind, ParagraphStyle] = {
    BlockKind.TITLE: ParagraphStyle(
        name="BlueprintTitle",
        parent=_BODY,
        fontSize=20,
        leading=24,
        alignment=TA_CENTER,
        spaceAfter=14,
    ),
    BlockKind.DISCOUNT: ParagraphStyle(name="BlueprintDiscount", parent=_BODY, spaceAfter=14),
    BlockKind.HEADING: ParagraphStyle(name="BlueprintHeading", parent=_BODY, fontName="Helvetica-Bold"),
    BlockKind.BULLET: ParagraphStyle(
        name="BlueprintBullet", parent=_BODY, leftIndent=18, bulletIndent=6
    ),
    BlockKind.NUMBERED: ParagraphStyle(name="BlueprintNumbered", parent=_BODY, leftIndent=18),
    BlockKind.PARAGRAPH: _BODY,
    BlockKind.CALL_TO_ACTION: ParagraphStyle(
        name="BlueprintCallToAction", parent=_BODY, alignment=TA_CENTER, spaceBefore=14
    ),
}


def discount_line(discount_percent: int) -> str:
    return f"Discount: {discount_percent}% off your next project"


class BlueprintRenderer:
    """
    Turns blueprint text into a PDF document.

    Layout is always: title, discount line, classified body in original
    order, call-to-action trailer.
    """

    def __init__(self, discount_percent: int = 25, classifier: BlockClassifier | None = None):
        self.discount_percent = discount_percent
        self.classifier = classifier or MarkdownClassifier()

    def document_blocks(self, blueprint_text: str) -> list[Block]:
        """Full block sequence of the document, header and trailer included."""
        return [
            Block(BlockKind.TITLE, DOCUMENT_TITLE),
            Block(BlockKind.DISCOUNT, discount_line(self.discount_percent)),
            *classify_blueprint(blueprint_text, self.classifier),
            Block(BlockKind.CALL_TO_ACTION, CALL_TO_ACTION),
        ]

    def render(self, blueprint_text: str) -> bytes:
        """
        Render the blueprint into PDF bytes.

        Args:
            blueprint_text: Normalized blueprint text

        Returns:
            PDF document bytes
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=LETTER,
            leftMargin=PAGE_MARGIN,
            rightMargin=PAGE_MARGIN,
            topMargin=PAGE_MARGIN,
            bottomMargin=PAGE_MARGIN,
            title=DOCUMENT_TITLE,
        )
        doc.build(self.build_story(self.document_blocks(blueprint_text)))
        return buffer.getvalue()

    def build_story(self, blocks: list[Block]) -> list:
        story: list = []
        for block in blocks:
            style = STYLES[block.kind]
            text = escape(block.text)
            if block.kind is BlockKind.BULLET:
                story.append(Paragraph(text, style, bulletText=BULLET_GLYPH))
            else:
                story.append(Paragraph(text, style))
            if block.kind is BlockKind.DISCOUNT:
                story.append(Spacer(1, 6))
        return story
