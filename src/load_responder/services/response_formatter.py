from typing import Optional

from load_responder.models import LoadInfo, ReplyEmail

DEFAULT_SIGNATURE = "Balto Booking"
CAPACITY_QUESTION = "When and where will you be empty for pickup?"
FALLBACK_SUBJECT = "Re: Load Inquiry"
FALLBACK_BODY = "Thank you for your email. We are processing your inquiry and will respond shortly."


def _closing(signature: str, footer: str) -> str:
    return f"Best regards,\n{signature}\n\n---\n{footer}"


def _load_details_body(reference: str, info: LoadInfo, signature: str) -> str:
    return (
        f"Hello,\n\n"
        f"Thank you for your inquiry about load {reference}. Here are the details:\n\n"
        f"LOAD DETAILS:\n"
        f"- Pickup: {info.pickup}\n"
        f"- Delivery: {info.delivery}\n"
        f"- Weight: {info.weight}\n"
        f"- Rate: {info.rate}\n\n"
        f"CAPACITY INQUIRY:\n"
        f"{CAPACITY_QUESTION}\n\n"
        f"{_closing(signature, 'Automated response with live QuoteFactory data')}"
    )


def _processing_body(reference: str, signature: str) -> str:
    return (
        f"Hello,\n\n"
        f"Thank you for your inquiry regarding load {reference}.\n\n"
        f"I've identified this load reference and am currently pulling the complete details "
        f"from our system. You'll receive:\n\n"
        f"LOAD INFORMATION:\n"
        f"- Pickup and delivery locations with dates/times\n"
        f"- Commodity details and weight requirements\n"
        f"- Our competitive rate quote\n"
        f"- Equipment specifications\n"
        f"- Any special handling requirements\n\n"
        f"This detailed information will be sent within the next 10-15 minutes via our load management team.\n\n"
        f"TO EXPEDITE: {CAPACITY_QUESTION}\n\n"
        f"We're ready to provide immediate quotes and book qualified loads on the spot.\n\n"
        f"{_closing(signature, 'Professional freight services with real-time load tracking')}"
    )


def _reference_needed_body(signature: str) -> str:
    return (
        f"Hello,\n\n"
        f"Thank you for reaching out about this load opportunity.\n\n"
        f"To provide you with accurate pricing and availability, could you please provide "
        f"the DAT load reference number or QuoteFactory load ID?\n\n"
        f"This will help us:\n"
        f"- Pull the exact load details from our system\n"
        f"- Provide you with competitive pricing\n"
        f"- Respond faster with availability\n\n"
        f"Once you provide the reference number, we'll get back to you immediately "
        f"with our quote and capacity.\n\n"
        f"Thank you!\n\n"
        f"{_closing(signature, 'Automated response - Please reply with DAT reference number')}"
    )


def format_response(
    reference: Optional[str],
    info: Optional[LoadInfo],
    subject: str,
    original_body: str,
    *,
    signature: str = DEFAULT_SIGNATURE,
) -> ReplyEmail:
    """Build the reply for an inbound load email.

    The template depends only on which of ``reference`` and ``info`` are
    present. ``original_body`` is accepted for callers that want to quote it
    but is not echoed by any current template.
    """
    if reference and info is not None:
        return ReplyEmail(subject=f"Re: {subject}", body=_load_details_body(reference, info, signature))
    if reference:
        return ReplyEmail(subject=f"Re: {subject}", body=_processing_body(reference, signature))
    return ReplyEmail(
        subject=f"Re: {subject} - DAT Reference Number Needed",
        body=_reference_needed_body(signature),
    )


def fallback_reply() -> ReplyEmail:
    return ReplyEmail(subject=FALLBACK_SUBJECT, body=FALLBACK_BODY)
