"""Contact form: validation and email payload construction.

The form posts an inquiry; if it validates, ``build_inquiry_params`` and
``build_autoreply_params`` produce the template parameters handed to the
mail relay (see ``mailer.py``).
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from .company import COMPANY_PROFILE

__all__ = [
    "Inquiry",
    "COUNTRIES",
    "INQUIRY_TYPES",
    "CONTACT_METHODS",
    "validate_inquiry",
    "build_inquiry_subject",
    "build_inquiry_params",
    "build_autoreply_params",
]

COUNTRIES = [
    "United States", "Canada", "United Kingdom", "Germany", "France",
    "Italy", "Spain", "Australia", "Japan", "China", "India",
    "Brazil", "Mexico", "South Africa", "UAE", "Saudi Arabia",
    "Singapore", "Malaysia", "Indonesia", "Thailand", "Vietnam",
    "South Korea", "Russia", "Turkey", "Egypt", "Nigeria", "Kenya",
    "Argentina", "Chile", "Colombia", "Other",
]

INQUIRY_TYPES = {"general": "General Inquiry", "urgent": "Urgent / Express"}
CONTACT_METHODS = {"email": "Email", "phone": "Phone/WhatsApp"}

MIN_REQUIREMENTS_LENGTH = 20

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_PATTERN = re.compile(r"^[\d\s+\-()]{8,}$")


@dataclass
class Inquiry:
    """A business inquiry as submitted through the contact form."""

    company_name: str = ""
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    country: str = ""
    requirements: str = ""
    inquiry_type: str = "general"
    preferred_contact: str = "email"

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "Inquiry":
        def get(key: str, default: str = "") -> str:
            value = form.get(key)
            return str(value) if value is not None else default

        inquiry_type = get("inquiry_type", "general")
        preferred = get("preferred_contact", "email")
        return cls(
            company_name=get("company_name"),
            contact_person=get("contact_person"),
            email=get("email"),
            phone=get("phone"),
            country=get("country"),
            requirements=get("requirements"),
            inquiry_type=inquiry_type if inquiry_type in INQUIRY_TYPES else "general",
            preferred_contact=preferred if preferred in CONTACT_METHODS else "email",
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @property
    def inquiry_type_label(self) -> str:
        return INQUIRY_TYPES.get(self.inquiry_type, INQUIRY_TYPES["general"])

    @property
    def preferred_contact_label(self) -> str:
        return CONTACT_METHODS.get(self.preferred_contact, CONTACT_METHODS["email"])


def validate_inquiry(inquiry: Inquiry) -> Dict[str, str]:
    """Return field -> error message; empty when the inquiry is valid."""
    errors: Dict[str, str] = {}

    if not inquiry.company_name.strip():
        errors["company_name"] = "Company name is required"

    if not inquiry.contact_person.strip():
        errors["contact_person"] = "Contact person is required"

    if not inquiry.email.strip():
        errors["email"] = "Email is required"
    elif not _EMAIL_PATTERN.match(inquiry.email):
        errors["email"] = "Please enter a valid email address"

    if not inquiry.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not _PHONE_PATTERN.match(inquiry.phone):
        errors["phone"] = "Please enter a valid phone number"

    if not inquiry.country:
        errors["country"] = "Please select your country"

    requirements = inquiry.requirements.strip()
    if not requirements:
        errors["requirements"] = "Please provide your requirements"
    elif len(requirements) < MIN_REQUIREMENTS_LENGTH:
        errors["requirements"] = (
            f"Please provide more details (minimum {MIN_REQUIREMENTS_LENGTH} characters)"
        )

    return errors


def build_inquiry_subject(inquiry: Inquiry) -> str:
    prefix = "URGENT: " if inquiry.inquiry_type == "urgent" else ""
    return f"{prefix}Business Inquiry - {inquiry.company_name}"


def build_inquiry_params(inquiry: Inquiry) -> Dict[str, str]:
    """Template parameters for the message sent to the sales inbox."""
    subject = build_inquiry_subject(inquiry)
    message = "\n".join(
        [
            "A new business inquiry has been submitted.",
            "",
            f"Company Name: {inquiry.company_name}",
            f"Contact Person: {inquiry.contact_person}",
            f"Email: {inquiry.email}",
            f"Phone / WhatsApp: {inquiry.phone}",
            f"Country: {inquiry.country}",
            f"Preferred Contact Method: {inquiry.preferred_contact_label}",
            f"Inquiry Type: {inquiry.inquiry_type_label}",
            "",
            "Requirements:",
            inquiry.requirements,
        ]
    )

    return {
        "to_email": COMPANY_PROFILE["email"],
        "from_name": inquiry.contact_person,
        "company_name": inquiry.company_name,
        "reply_to": inquiry.email,
        "email": inquiry.email,
        "phone": inquiry.phone,
        "country": inquiry.country,
        "inquiry_type": inquiry.inquiry_type_label,
        "preferred_contact": inquiry.preferred_contact_label,
        "subject": subject,
        "message": message,
        "requirements": inquiry.requirements,
    }


def build_autoreply_params(inquiry: Inquiry) -> Dict[str, str]:
    """Template parameters for the confirmation sent back to the submitter."""
    return {
        "to_email": inquiry.email,
        "to_name": inquiry.contact_person,
        "company_name": inquiry.company_name,
        "inquiry_type": inquiry.inquiry_type_label,
        "preferred_contact": inquiry.preferred_contact_label,
        "submitted_subject": build_inquiry_subject(inquiry),
        "support_email": COMPANY_PROFILE["email"],
        "support_phone": COMPANY_PROFILE["phone"],
        "website": COMPANY_PROFILE["website"],
        "message": (
            "Thank you for contacting Larkosis Pharma. We have received your inquiry and "
            "our team will review it shortly."
        ),
    }
