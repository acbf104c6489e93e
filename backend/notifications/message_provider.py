"""
Default copy for the monthly status email.

MessageProvider fills an EmailTemplate with the text for the selected
MessageVariant, then renders it to HTML and plain text.
"""

from html import escape
from typing import Any

from config.mail_config import MailConfig
from models import EmailTemplate, MessageVariant, RenderedMessage, StorageInfo

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]


def format_size(num_bytes: int) -> str:
    """Human readable file size, e.g. 1536 -> '1.5 KB'."""
    size = float(max(num_bytes, 0))
    for unit in _SIZE_UNITS:
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            break
        size /= 1024
    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"


def _usage_sentence(storage: StorageInfo) -> str:
    if storage.quota <= 0:
        return f"You are currently using {format_size(storage.used)} of storage."
    return (
        f"You are currently using {format_size(storage.used)} of "
        f"{format_size(storage.quota)} ({storage.relative:g}%)."
    )


class MessageProvider:
    """Writes variant copy into templates and renders them."""

    def __init__(self, config: MailConfig):
        self.config = config

    def create_template(self) -> EmailTemplate:
        return EmailTemplate(
            subject=f"Your monthly {self.config.instance_name} status",
            footer=(
                "You received this email because monthly status updates are "
                f"enabled for your {self.config.instance_name} account."
            ),
        )

    def populate(
        self, template: EmailTemplate, variant: MessageVariant, context: dict[str, Any]
    ) -> None:
        """
        Fill a template with the copy for one variant.

        Args:
            template: Template from create_template()
            variant: Selected message variant
            context: display_name, storage_info, share_count,
                first_time_sent and unsubscribe_url
        """
        self.write_welcome(template, context)

        storage: StorageInfo = context["storage_info"]
        if variant == MessageVariant.STORAGE_FULL:
            self.write_storage_full(template, storage)
        elif variant == MessageVariant.STORAGE_WARNING:
            self.write_storage_warning(template, storage)
        else:
            self.write_storage_space_left(template, storage)
            if variant == MessageVariant.SHARE_ACTIVITY:
                self.write_share_message(template, context.get("share_count", 0))
            else:
                self.write_generic_message(template, variant)

        template.unsubscribe_url = context.get("unsubscribe_url")

    def write_welcome(self, template: EmailTemplate, context: dict[str, Any]) -> None:
        template.add_heading(f"Hello {context['display_name']},")
        if context.get("first_time_sent"):
            template.add_paragraph(
                f"Welcome to your monthly {self.config.instance_name} status email. "
                "Once a month we will let you know how your account is doing "
                "and share a few tips to get the most out of it."
            )

    def write_storage_full(self, template: EmailTemplate, storage: StorageInfo) -> None:
        template.subject = f"Your {self.config.instance_name} storage is full"
        template.add_paragraph(
            "Your storage is full. New files can no longer be uploaded or "
            "synchronized until you free up some space."
        )
        template.add_paragraph(_usage_sentence(storage))
        template.add_button("Manage your storage", self.config.files_url)

    def write_storage_warning(
        self, template: EmailTemplate, storage: StorageInfo
    ) -> None:
        template.subject = f"Your {self.config.instance_name} storage is almost full"
        template.add_paragraph(
            "Your storage is almost full. Consider deleting files you no longer "
            "need before you run out of space."
        )
        template.add_paragraph(_usage_sentence(storage))
        template.add_button("Manage your storage", self.config.files_url)

    def write_storage_space_left(
        self, template: EmailTemplate, storage: StorageInfo
    ) -> None:
        template.add_paragraph(_usage_sentence(storage))

    def write_share_message(self, template: EmailTemplate, share_count: int) -> None:
        noun = "share" if share_count == 1 else "shares"
        template.add_paragraph(
            f"You have {share_count} active {noun}. Keep collaborating by "
            "sharing files and folders with your colleagues and friends."
        )
        template.add_button("View your shares", f"{self.config.files_url}/shareoverview")

    def write_generic_message(
        self, template: EmailTemplate, variant: MessageVariant
    ) -> None:
        if variant == MessageVariant.NO_FILE_UPLOAD:
            template.add_paragraph(
                "You have not uploaded any files yet. Store your documents, "
                "photos and more in one place and reach them from any device."
            )
            template.add_button("Upload your first file", self.config.files_url)
        else:
            template.add_paragraph(
                "Did you know you can share files with a link, even with people "
                "who do not have an account?"
            )
            template.add_button("Open your files", self.config.files_url)

    def render(self, template: EmailTemplate, to: str) -> RenderedMessage:
        headers = {}
        if template.unsubscribe_url:
            headers["List-Unsubscribe"] = f"<{template.unsubscribe_url}>"
            headers["List-Unsubscribe-Post"] = "List-Unsubscribe=One-Click"

        return RenderedMessage(
            to=to,
            subject=template.subject,
            html=_build_html(template),
            text=_build_text(template),
            headers=headers,
        )


def _build_html(template: EmailTemplate) -> str:
    """Build HTML email body."""
    html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(template.subject)}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            line-height: 1.6;
            color: #333;
            max-width: 600px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }}
        .container {{
            background-color: white;
            padding: 30px;
            border-radius: 8px;
        }}
        h1 {{
            margin: 0 0 20px 0;
            color: #0082c9;
            font-size: 22px;
        }}
        .button {{
            display: inline-block;
            margin: 10px 0;
            padding: 10px 18px;
            background-color: #0082c9;
            color: white;
            border-radius: 6px;
            text-decoration: none;
            font-weight: 500;
        }}
        .footer {{
            margin-top: 30px;
            padding-top: 20px;
            border-top: 1px solid #e5e7eb;
            font-size: 13px;
            color: #6b7280;
            text-align: center;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{escape(template.heading)}</h1>
"""

    for paragraph in template.paragraphs:
        html += f"""
        <p>{escape(paragraph)}</p>
"""

    for button in template.buttons:
        html += f"""
        <a href="{escape(button.url)}" class="button">{escape(button.label)}</a>
"""

    html += f"""
        <div class="footer">
            <p>{escape(template.footer)}</p>
"""
    if template.unsubscribe_url:
        html += f"""
            <p><a href="{escape(template.unsubscribe_url)}">Unsubscribe from these emails</a></p>
"""
    html += """
        </div>
    </div>
</body>
</html>
"""
    return html


def _build_text(template: EmailTemplate) -> str:
    """Build plain text email body."""
    text = f"{template.heading}\n\n"

    for paragraph in template.paragraphs:
        text += f"{paragraph}\n\n"

    for button in template.buttons:
        text += f"{button.label}: {button.url}\n"

    text += f"\n---\n{template.footer}\n"
    if template.unsubscribe_url:
        text += f"Unsubscribe: {template.unsubscribe_url}\n"

    return text
