"""Flask web app for the Larkosis Pharma product inquiry site.

Serves the home and about pages, the searchable product catalog with CSV
export, product detail pages, and the contact form that relays inquiries
through EmailJS.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from dotenv import load_dotenv
from flask import Flask, Response, abort, redirect, render_template, request

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from catalog.config import (  # noqa: E402
    CSV_FILENAME,
    DEBOUNCE_SECONDS,
    FEATURED_PRODUCTS_LIMIT,
    PAGE_SIZE_OPTIONS,
    RELATED_PRODUCTS_LIMIT,
    SENTINEL,
)
from catalog.csv_utils import build_catalog_csv  # noqa: E402
from catalog.extraction import derive_attributes  # noqa: E402
from catalog.query import filter_products, page_window, query_catalog, sort_products  # noqa: E402
from catalog.state import (  # noqa: E402
    ClearFilters,
    RemoveFilter,
    SetPage,
    SetPageSize,
    ToggleSort,
    ViewState,
)
from catalog.store import ProductStore  # noqa: E402

from .api import api  # noqa: E402
from .catalog_view import STORE_KEY, get_store, rows, state_href  # noqa: E402
from .company import COMPANY_PROFILE, build_quote_mailto  # noqa: E402
from .config import FLASK_DEBUG, FLASK_HOST, FLASK_PORT, PRODUCTS_PATH  # noqa: E402
from .contact import COUNTRIES, Inquiry, validate_inquiry  # noqa: E402
from .faqs import build_product_faqs  # noqa: E402
from .logging_utils import log_interaction  # noqa: E402
from .mailer import (  # noqa: E402
    EmailJSSettings,
    EmailServiceNotConfigured,
    InquiryDeliveryError,
    deliver_inquiry,
)

__all__ = ["app", "create_app"]

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ProductStore] = None,
    email_settings: Optional[EmailJSSettings] = None,
) -> Flask:
    """Build the Flask app around a product store loaded once at startup."""
    flask_app = Flask(__name__)
    flask_app.extensions[STORE_KEY] = store if store is not None else ProductStore.from_json(PRODUCTS_PATH)
    flask_app.config["EMAILJS_SETTINGS"] = email_settings or EmailJSSettings.from_config()
    flask_app.register_blueprint(api)
    _register_routes(flask_app)
    return flask_app


def _register_routes(flask_app: Flask) -> None:

    @flask_app.context_processor
    def inject_globals():
        return {
            "company": COMPANY_PROFILE,
            "categories_nav": get_store().get_category_counts(),
            "quote_mailto": build_quote_mailto,
            "sentinel": SENTINEL,
        }

    # ---------- PAGES ----------

    @flask_app.route("/", methods=["GET"])
    def index() -> str:
        """Render the home page."""
        store = get_store()
        return render_template(
            "index.html",
            featured=store.get_all()[:FEATURED_PRODUCTS_LIMIT],
            category_counts=store.get_category_counts(),
        )

    @flask_app.route("/about", methods=["GET"])
    def about() -> str:
        """Render the company profile page."""
        store = get_store()
        return render_template(
            "about.html",
            product_count=len(store),
            category_count=len(store.get_category_counts()),
        )

    @flask_app.route("/products", methods=["GET"])
    def products() -> Union[str, Response]:
        """Render one page of the catalog for the state encoded in the URL.

        Default, empty, unknown or reordered parameters are redirected to the
        canonical URL of the same state.
        """
        store = get_store()
        state = ViewState.from_query_params(request.args)
        if list(request.args.items(multi=True)) != list(state.to_query_params().items()):
            return redirect(state_href("/products", state))

        result = query_catalog(store.get_all(), state.applied, state.sort, state.pagination)

        # Every link on the page is the URL of the state one event away
        links = {
            "sort": lambda field: state_href("/products", state, ToggleSort(field)),
            "page": lambda number: state_href("/products", state, SetPage(number)),
            "size": lambda size: state_href("/products", state, SetPageSize(size)),
            "remove": lambda field: state_href("/products", state, RemoveFilter(field)),
            "clear": state_href("/products", state, ClearFilters()),
            "export": state_href("/products/export.csv", state),
        }

        return render_template(
            "products.html",
            state=state,
            result=result,
            rows=rows(result.page_items),
            summary=store.summary(),
            category_counts=store.get_category_counts(),
            dosage_forms=store.dosage_form_options(),
            strengths=store.strength_options(),
            page_sizes=PAGE_SIZE_OPTIONS,
            pages=page_window(result.page, result.total_pages),
            debounce_ms=int(DEBOUNCE_SECONDS * 1000),
            links=links,
        )

    @flask_app.route("/products/export.csv", methods=["GET"])
    def export_csv() -> Response:
        """Download every product matching the current filters as CSV."""
        store = get_store()
        state = ViewState.from_query_params(request.args)
        matched = sort_products(filter_products(store.get_all(), state.applied), state.sort)
        csv_text = build_catalog_csv(matched)

        log_interaction(
            "csv_export",
            {"filters": state.to_query_params(), "rows": len(matched)},
        )

        return Response(
            csv_text,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
        )

    @flask_app.route("/products/<slug>", methods=["GET"])
    def product_detail(slug: str) -> str:
        """Render a product page, or the not-found page for an unknown slug."""
        store = get_store()
        product = store.get_by_slug(slug)
        if product is None:
            abort(404)

        return render_template(
            "product_detail.html",
            product=product,
            attrs=derive_attributes(product),
            related=store.get_related(product, RELATED_PRODUCTS_LIMIT),
            faqs=build_product_faqs(product),
        )

    @flask_app.route("/contact", methods=["GET", "POST"])
    def contact() -> Union[str, Tuple[str, int]]:
        """Show the inquiry form; on POST validate and relay it by email."""
        if request.method == "GET":
            return render_template("contact.html", form=Inquiry(), errors={}, status=None, countries=COUNTRIES)

        inquiry = Inquiry.from_form(request.form)
        errors = validate_inquiry(inquiry)
        if errors:
            return (
                render_template("contact.html", form=inquiry, errors=errors, status=None, countries=COUNTRIES),
                400,
            )

        settings: EmailJSSettings = flask_app.config["EMAILJS_SETTINGS"]
        try:
            result = deliver_inquiry(inquiry, settings)
        except EmailServiceNotConfigured as e:
            status = {"type": "error", "message": str(e)}
            return (
                render_template("contact.html", form=inquiry, errors={}, status=status, countries=COUNTRIES),
                503,
            )
        except InquiryDeliveryError as e:
            logger.exception("Inquiry delivery failed")
            log_interaction(
                "inquiry_failed",
                {"company_name": inquiry.company_name, "country": inquiry.country, "error": str(e)},
            )
            status = {
                "type": "error",
                "message": "Failed to submit inquiry. Please try again or email us directly.",
            }
            return (
                render_template("contact.html", form=inquiry, errors={}, status=status, countries=COUNTRIES),
                502,
            )

        log_interaction(
            "inquiry_submitted",
            {
                "company_name": inquiry.company_name,
                "country": inquiry.country,
                "inquiry_type": inquiry.inquiry_type,
                "autoreply_sent": result.autoreply_sent,
            },
        )

        if settings.autoreply_template_id and result.autoreply_sent:
            message = "Inquiry submitted successfully. A confirmation email has been sent to your inbox."
        else:
            message = "Inquiry submitted successfully. Our team will contact you shortly."
        status = {"type": "success", "message": message}
        return render_template("contact.html", form=Inquiry(), errors={}, status=status, countries=COUNTRIES)

    @flask_app.errorhandler(404)
    def not_found(error) -> Tuple[str, int]:
        return render_template("not_found.html"), 404


app = create_app()


if __name__ == "__main__":
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
