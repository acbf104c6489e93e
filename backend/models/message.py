"""Pydantic models for rendered email content."""

from pydantic import BaseModel, Field

from models.types import EmailAddress


class EmailButton(BaseModel):
    """Call-to-action link rendered as a button in HTML and a URL in text."""

    label: str
    url: str


class EmailTemplate(BaseModel):
    """Email content assembled block by block before rendering."""

    subject: str = ""
    heading: str = ""
    paragraphs: list[str] = Field(default_factory=list)
    buttons: list[EmailButton] = Field(default_factory=list)
    footer: str = ""
    unsubscribe_url: str | None = None

    def add_heading(self, heading: str) -> None:
        self.heading = heading

    def add_paragraph(self, text: str) -> None:
        self.paragraphs.append(text)

    def add_button(self, label: str, url: str) -> None:
        self.buttons.append(EmailButton(label=label, url=url))


class RenderedMessage(BaseModel):
    """Fully rendered email ready to hand to a mail transport."""

    to: EmailAddress
    subject: str
    html: str
    text: str
    headers: dict[str, str] = Field(default_factory=dict)
