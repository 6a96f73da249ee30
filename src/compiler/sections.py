"""Section renderers appended after the body: signature, service, notary, order, footer."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from compiler.layout import BOLD_FONT, FOOTER_FONT, LayoutEngine, TextOp
from schemas.filing import (
    NotarySettings,
    ProposedOrderSettings,
    ServiceSettings,
    service_method_label,
)
from utils.text import as_text

logger = logging.getLogger(__name__)

SIGNATURE_LINE_WIDTH = 260.0
JUDGE_LINE_WIDTH = 320.0
BLANK_DATE = "______________"
BLANK_NAME = "______________________"

JURAT_TEMPLATE = (
    "State of {state}\n"
    "County of {county}\n"
    "\n"
    "Subscribed and sworn to (or affirmed) before me on {date}, by " + BLANK_NAME + "."
)
ACKNOWLEDGMENT_TEMPLATE = (
    "State of {state}\n"
    "County of {county}\n"
    "\n"
    "On {date}, before me, {notary_name}, Notary Public, personally appeared "
    + BLANK_NAME
    + ", proved to me on the basis of satisfactory evidence to be the person(s) "
    "whose name(s) is/are subscribed to the within instrument and acknowledged to "
    "me that he/she/they executed the same."
)


@dataclass(frozen=True)
class SignatureImage:
    data: bytes
    width: int
    height: int
    format: str


def decode_signature_image(data: bytes | None) -> Optional[SignatureImage]:
    """Decode stored signature bytes, trying PNG first and then JPEG."""
    if not data:
        return None
    for fmt in ("PNG", "JPEG"):
        try:
            with Image.open(io.BytesIO(data), formats=[fmt]) as image:
                image.load()
                return SignatureImage(data=data, width=image.width, height=image.height, format=fmt)
        except (OSError, ValueError):
            continue
    logger.warning("Signature image is neither PNG nor JPEG; drawing a blank signature line")
    return None


def fit_within(width: float, height: float, max_width: float, max_height: float) -> tuple[float, float]:
    """Scale down to fit the box, preserving aspect ratio; never scales up."""
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    scale = min(max_width / width, max_height / height, 1.0)
    return width * scale, height * scale


def render_signature(
    engine: LayoutEngine,
    *,
    name: str | None,
    title: str | None,
    image: SignatureImage | None,
) -> None:
    lh = engine.line_height
    left = engine.geometry.margin_left

    engine.ensure_space(lh * 8)
    engine.move_down(lh / 2)
    engine.draw_text("Dated: ____________________", left)
    engine.move_down(lh)
    engine.draw_text("Respectfully submitted,", left)
    engine.move_down(lh)

    if image is not None:
        width, height = fit_within(
            image.width,
            image.height,
            engine.options.signature_max_width,
            engine.options.signature_max_height,
        )
        engine.ensure_space(height + lh * 3)
        engine.draw_image(image.data, width, height)
        engine.move_down(height + lh / 2)
    else:
        engine.ensure_space(lh * 2)
        engine.draw_rule(left, left + SIGNATURE_LINE_WIDTH, offset=10)
        engine.move_down(lh)

    engine.draw_text(as_text(name).strip() or "[NAME]", left)
    engine.move_down(lh)
    signer_title = as_text(title).strip()
    if signer_title:
        engine.draw_text(signer_title, left)
        engine.move_down(lh)


def service_lines(service: ServiceSettings) -> list[str]:
    """Certificate-of-service paragraphs; "" entries are paragraph gaps."""
    service_date = as_text(service.date).strip() or BLANK_DATE
    method_default = as_text(service.method_default).strip()
    method_details = as_text(service.method_details).strip()

    lines = [
        f"I certify that on {service_date}, I served the foregoing document on the "
        "following parties by the method(s) stated below.",
        "",
    ]
    rendered = 0
    for recipient in service.recipients:
        name = as_text(recipient.name).strip()
        if not name:
            continue
        address = as_text(recipient.address_or_email).strip()
        method = as_text(recipient.method).strip() or method_default
        details = as_text(recipient.details).strip()
        parts = [
            name,
            f"({address})" if address else "",
            f"- {service_method_label(method)}" if method else "",
            f"({details})" if details else "",
        ]
        lines.append(" ".join(part for part in parts if part))
        rendered += 1
    if not rendered:
        method = service_method_label(method_default) or "[METHOD]"
        lines.append(f"[RECIPIENT NAME] - {method}")
    if method_details:
        lines.extend(["", f"Details: {method_details}"])
    return lines


def render_certificate_of_service(engine: LayoutEngine, service: ServiceSettings) -> None:
    lh = engine.line_height
    engine.ensure_space(lh)
    engine.draw_centered("CERTIFICATE OF SERVICE", font=BOLD_FONT)
    engine.move_down(lh)

    for line in service_lines(service):
        if not line:
            continue
        engine.paragraph(line)


def notary_text(notary: NotarySettings) -> str:
    template = ACKNOWLEDGMENT_TEMPLATE if _notary_type(notary) == "acknowledgment" else JURAT_TEMPLATE
    return template.format(
        state=as_text(notary.state).strip() or "________",
        county=as_text(notary.county).strip() or "________",
        date=as_text(notary.date).strip() or BLANK_DATE,
        notary_name=as_text(notary.notary_name).strip() or "________________",
    )


def render_notary(engine: LayoutEngine, notary: NotarySettings) -> None:
    lh = engine.line_height
    left = engine.geometry.margin_left
    heading = "NOTARY ACKNOWLEDGMENT" if _notary_type(notary) == "acknowledgment" else "JURAT"

    engine.ensure_space(lh)
    engine.draw_centered(heading, font=BOLD_FONT)
    engine.move_down(lh)

    for raw in notary_text(notary).split("\n"):
        line = raw.strip()
        if not line:
            engine.move_down(lh)
            continue
        for wrapped in engine.wrap(line):
            engine.text_line(wrapped)
        engine.move_down(lh / 2)

    engine.ensure_space(lh * 3)
    engine.draw_rule(left, left + SIGNATURE_LINE_WIDTH, offset=10)
    engine.move_down(lh)
    engine.draw_text("Notary Public", left)
    engine.move_down(lh)
    expires = as_text(notary.commission_expires).strip()
    if expires:
        engine.draw_text(f"My commission expires: {expires}", left)
        engine.move_down(lh)
    engine.move_down(lh / 2)


def render_proposed_order(engine: LayoutEngine, order: ProposedOrderSettings) -> None:
    """Proposed order always opens a fresh page."""
    lh = engine.line_height
    left = engine.geometry.margin_left
    title = as_text(order.title).strip() or "PROPOSED ORDER"
    judge_name = as_text(order.judge_name).strip() or "Judge"
    judge_title = as_text(order.judge_title).strip() or "Judge"
    order_date = as_text(order.date).strip() or BLANK_DATE

    engine.new_page()
    engine.draw_centered(title.upper(), font=BOLD_FONT, size=engine.options.title_font_size)
    engine.move_down(lh * 2)

    engine.ensure_space(lh * 6)
    engine.draw_text("IT IS SO ORDERED.", left)
    engine.move_down(lh * 2)

    engine.draw_rule(left, left + JUDGE_LINE_WIDTH, offset=10)
    engine.move_down(lh)
    engine.draw_text(judge_name, left)
    engine.move_down(lh)
    engine.draw_text(judge_title, left)
    engine.move_down(lh)
    engine.draw_text(f"Date: {order_date}", left)
    engine.move_down(lh)


def render_footer(engine: LayoutEngine) -> None:
    """Stamp "Page i of N" on every finished page, above the Bates band."""
    size = engine.options.footer_font_size
    total = len(engine.pages)
    for page in engine.pages:
        label = f"Page {page.index + 1} of {total}"
        width = engine.measure(label, FOOTER_FONT, size)
        x = (engine.geometry.width - width) / 2
        # Footer sits in the bottom margin, outside the cursor's range.
        page.ops.append(
            TextOp(text=label, x=x, y=engine.options.footer_baseline, font=FOOTER_FONT, size=size)
        )


def _notary_type(notary: NotarySettings) -> str:
    return as_text(notary.type).strip().lower() or "jurat"


__all__ = [
    "ACKNOWLEDGMENT_TEMPLATE",
    "JURAT_TEMPLATE",
    "SignatureImage",
    "decode_signature_image",
    "fit_within",
    "notary_text",
    "render_certificate_of_service",
    "render_footer",
    "render_notary",
    "render_proposed_order",
    "render_signature",
    "service_lines",
]
