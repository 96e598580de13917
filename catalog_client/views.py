"""
View state for the catalog client: list, detail, create and edit pages.

Views hold the data a page renders and react to user actions. Alerts,
confirmation prompts and navigation are injected callables so the same
logic drives a browser bridge, a terminal, or a test.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Set

from catalog_client.api_service import ApiError, ApiService
from catalog_client.image_upload import ImageUploader
from catalog_client.listing import SortField, SortOrder, filter_and_sort_products
from shared.product_types import parse_timestamp

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO'))

DELETE_CONFIRMATION = "Are you sure you want to delete this product?"

Alert = Callable[[str], None]
Confirm = Callable[[str], bool]
Navigate = Callable[[str], None]


def _log_alert(message: str) -> None:
    logger.warning(message)


def _always_confirm(message: str) -> bool:
    return True


def _stay(path: str) -> None:
    pass


def product_path(product_id: str) -> str:
    return f"/product/{product_id}"


def format_price(price: Any) -> str:
    """Format a price as US dollars, e.g. $1,234.50."""
    return f"${float(price or 0):,.2f}"


def format_date(value: str) -> str:
    """Format an ISO timestamp as 'January 5, 2024 at 03:04 PM'."""
    moment = parse_timestamp(value)
    return f"{moment.strftime('%B')} {moment.day}, {moment.year} at {moment.strftime('%I:%M %p')}"


class ProductListView:
    """Product list with search, sort and delete."""

    def __init__(self, api: ApiService, alert: Alert = _log_alert, confirm: Confirm = _always_confirm):
        self.api = api
        self.alert = alert
        self.confirm = confirm
        self.products: List[Dict[str, Any]] = []
        self.filtered_products: List[Dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None
        self.search_term = ""
        self.sort_by = SortField.CREATED_AT
        self.sort_order = SortOrder.DESC
        self.deleting_ids: Set[str] = set()

    def refresh(self) -> None:
        """Recompute the visible list from records, search term and sort."""
        self.filtered_products = filter_and_sort_products(
            self.products, self.search_term, self.sort_by, self.sort_order
        )

    def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            response = self.api.get_products()
            self.products = response.get("products", [])
        except ApiError as e:
            logger.error(f"Error loading products: {e.message}")
            self.error = "Failed to load products. Please try again."
        finally:
            self.loading = False
        self.refresh()

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self.refresh()

    def clear_search(self) -> None:
        self.set_search_term("")

    def set_sort_by(self, sort_by: str) -> None:
        self.sort_by = SortField(sort_by)
        self.refresh()

    def toggle_sort_order(self) -> None:
        self.sort_order = SortOrder.DESC if self.sort_order == SortOrder.ASC else SortOrder.ASC
        self.refresh()

    def delete(self, product_id: str) -> bool:
        """
        Delete a product after confirmation.

        Returns:
            True if the product was deleted
        """
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        self.deleting_ids.add(product_id)
        try:
            self.api.delete_product(product_id)
            self.products = [p for p in self.products if p.get("id") != product_id]
            self.refresh()
            return True
        except ApiError as e:
            logger.error(f"Error deleting product: {e.message}")
            self.alert("Failed to delete product. Please try again.")
            return False
        finally:
            self.deleting_ids.discard(product_id)

    @property
    def summary(self) -> str:
        return f"{len(self.filtered_products)} of {len(self.products)} products"

    @property
    def empty_message(self) -> Optional[str]:
        if self.filtered_products:
            return None
        if self.search_term:
            return "No products found matching your search."
        return "No products yet."


class ProductDetailView:
    """A single product with delete."""

    def __init__(self, api: ApiService, alert: Alert = _log_alert, confirm: Confirm = _always_confirm, navigate: Navigate = _stay):
        self.api = api
        self.alert = alert
        self.confirm = confirm
        self.navigate = navigate
        self.product: Optional[Dict[str, Any]] = None
        self.loading = False
        self.error: Optional[str] = None
        self.is_deleting = False

    def load(self, product_id: str) -> None:
        self.loading = True
        self.error = None
        try:
            self.product = self.api.get_product(product_id)
        except ApiError as e:
            logger.error(f"Error loading product: {e.message}")
            self.error = "Product not found or failed to load."
        finally:
            self.loading = False

    def delete(self) -> bool:
        if not self.product or not self.confirm(DELETE_CONFIRMATION):
            return False

        self.is_deleting = True
        try:
            self.api.delete_product(self.product["id"])
            self.navigate("/")
            return True
        except ApiError as e:
            logger.error(f"Error deleting product: {e.message}")
            self.alert("Failed to delete product. Please try again.")
            return False
        finally:
            self.is_deleting = False

    @property
    def price_label(self) -> str:
        return format_price(self.product.get("price")) if self.product else ""

    @property
    def created_label(self) -> str:
        return format_date(self.product.get("created_at")) if self.product else ""

    @property
    def updated_label(self) -> str:
        return format_date(self.product.get("updated_at")) if self.product else ""


class ProductFormView(ABC):
    """Shared form state for the create and edit pages."""

    failure_message = "Failed to save product. Please try again."

    def __init__(self, api: ApiService, alert: Alert = _log_alert, navigate: Navigate = _stay):
        self.api = api
        self.alert = alert
        self.navigate = navigate
        self.form: Dict[str, Any] = {"name": "", "price": 0, "description": "", "image": ""}
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

    def set_field(self, field: str, value: Any) -> None:
        """Update a form field and clear its error."""
        if field == "price":
            value = self._parse_price(value)
        self.form[field] = value
        if self.errors.get(field):
            self.errors[field] = ""

    @staticmethod
    def _parse_price(value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0

    def set_image(self, image_url: str) -> None:
        self.form["image"] = image_url

    def image_uploader(self) -> ImageUploader:
        """Upload widget wired to this form's image field."""
        return ImageUploader(self.api, self.set_image, self.alert, current_image=self.form.get("image"))

    def validate(self) -> bool:
        errors: Dict[str, str] = {}

        if not (self.form.get("name") or "").strip():
            errors["name"] = "Product name is required"

        price = self.form.get("price")
        if price is not None and price <= 0:
            errors["price"] = "Price must be greater than 0"

        self.errors = errors
        return not errors

    @abstractmethod
    def save(self) -> Dict[str, Any]:
        """Send the form to the API and return the stored product."""

    def submit(self) -> bool:
        """
        Validate and send the form.

        Returns:
            True if the API accepted it
        """
        if not self.validate():
            return False

        self.is_submitting = True
        try:
            product = self.save()
            self.navigate(product_path(product["id"]))
            return True
        except ApiError as e:
            logger.error(f"Error saving product: {e.message}")
            self.alert(self.failure_message)
            return False
        finally:
            self.is_submitting = False


class CreateProductView(ProductFormView):
    failure_message = "Failed to create product. Please try again."

    def save(self) -> Dict[str, Any]:
        return self.api.create_product(dict(self.form))


class EditProductView(ProductFormView):
    failure_message = "Failed to update product. Please try again."

    def __init__(self, api: ApiService, alert: Alert = _log_alert, navigate: Navigate = _stay):
        super().__init__(api, alert, navigate)
        self.product: Optional[Dict[str, Any]] = None
        self.loading = False
        self.error: Optional[str] = None

    def load(self, product_id: str) -> None:
        self.loading = True
        self.error = None
        try:
            self.product = self.api.get_product(product_id)
            self.form = {
                "name": self.product.get("name", ""),
                "price": self.product.get("price"),
                "description": self.product.get("description") or "",
                "image": self.product.get("image") or "",
            }
        except ApiError as e:
            logger.error(f"Error loading product: {e.message}")
            self.error = "Product not found or failed to load."
        finally:
            self.loading = False

    def submit(self) -> bool:
        if not self.product:
            return False
        return super().submit()

    def save(self) -> Dict[str, Any]:
        self.product = self.api.update_product(self.product["id"], dict(self.form))
        return self.product
