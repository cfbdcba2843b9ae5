"""Static company profile shown on the home, about and contact pages."""

from typing import Any, Dict
from urllib.parse import quote

__all__ = ["COMPANY_PROFILE", "build_quote_mailto"]

COMPANY_PROFILE: Dict[str, Any] = {
    "brand": "Larkosis Pharma",
    "legal_name": "Larksois Pharma Pvt. Ltd.",
    "email": "larksoispharma@gmail.com",
    "phone": "+91 (0) 22-3557-3071",
    "website": "https://www.larksois.com",
    "office_address": (
        "#06 Triveni Apartment, Plot 157-160, Sector 19, Kharghar, "
        "New Mumbai, Maharashtra, India 410210"
    ),
    "overview": (
        "Larksois Pharma Pvt. Ltd., headquartered in Mumbai, India, is an emerging global "
        "pharmaceutical company focused on product research, manufacturing, and marketing of "
        "quality and affordable generic and branded formulations."
    ),
    "market_focus": (
        "The company serves regulated and unregulated markets across Asia, Africa, and South "
        "America, with exports contributing a substantial share of business."
    ),
    "manufacturing": (
        "Manufacturing is supported by facilities benchmarked to international standards, with "
        "capabilities in tablets, capsules, injections, ointments, and powders."
    ),
    "quality": (
        "Quality systems are aligned to cGMP and global regulatory expectations, with strong "
        "QA/QC controls, SOP-led batch checks, and continuous compliance monitoring."
    ),
    "research": (
        "R&D activity includes formulation development, novel drug delivery systems, and "
        "market-aligned product innovation, with focus areas such as anti-malarials, oncology, "
        "cardiology, and ophthalmology."
    ),
    "documents": {
        "company_profile_pdf": "/static/documents/larksois-company-profile.pdf",
        "product_list_pdf": "/static/documents/larksois-product-list.pdf",
    },
    "values": [
        "Sustained performance",
        "Integrity",
        "Entrepreneurship",
        "Customer focus",
        "Working together",
        "Respect",
    ],
    "therapeutic_coverage": [
        "Anthelmintic",
        "Anti-malarial",
        "Anti-bacterial",
        "Anti-depressant",
        "Anti-histaminic",
        "Anti-diabetic",
        "Anti-spasmodic",
        "Anti-osteoporotic",
        "Anti-fungal",
        "Anesthetic",
        "Anti-ulcerant",
        "Anti-tussive",
        "NSAID",
        "Cardio-vascular",
        "Anxiolytic",
        "Skeletal muscle relaxant",
        "Steroids",
        "Anti-emetic",
        "Other antibiotics",
        "Oncology",
        "Ophthalmology",
    ],
}


def build_quote_mailto(product_name: str = "Product Inquiry") -> str:
    """Build a ``mailto:`` link pre-filled with a quotation request."""
    subject = quote(f"Quote Request - {product_name}", safe="")
    body = quote(
        "\n".join(
            [
                "Hello Larkosis Pharma Team,",
                "",
                f"I would like a quotation for: {product_name}",
                "",
                "Required quantity:",
                "Target market / destination country:",
                "Company name:",
                "Contact person:",
                "Phone / WhatsApp:",
                "",
                "Thank you.",
            ]
        ),
        safe="",
    )
    return f"mailto:{COMPANY_PROFILE['email']}?subject={subject}&body={body}"
