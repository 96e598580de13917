import pytest

from catalog_client.api_service import ApiError
from catalog_client.image_upload import ImageFile, ImageUploader
from catalog_client.views import (
    CreateProductView,
    EditProductView,
    ProductDetailView,
    ProductFormView,
    ProductListView,
    format_date,
    format_price,
)


class StubApi:
    """ApiService double: canned results, or ApiError for the named methods."""

    def __init__(self, products=None, fail=()):
        self.products = {p["id"]: dict(p) for p in (products or [])}
        self.fail = set(fail)
        self.calls = []

    def _check(self, name):
        if name in self.fail:
            raise ApiError("boom", status_code=500)

    def get_products(self):
        self.calls.append(("get_products",))
        self._check("get_products")
        return {"products": list(self.products.values())}

    def get_product(self, product_id):
        self.calls.append(("get_product", product_id))
        self._check("get_product")
        if product_id not in self.products:
            raise ApiError("Product not found", status_code=404)
        return dict(self.products[product_id])

    def create_product(self, product):
        self.calls.append(("create_product", product))
        self._check("create_product")
        return {"id": "new-id", **product}

    def update_product(self, product_id, product):
        self.calls.append(("update_product", product_id, product))
        self._check("update_product")
        self.products[product_id].update(product)
        return dict(self.products[product_id])

    def delete_product(self, product_id):
        self.calls.append(("delete_product", product_id))
        self._check("delete_product")
        self.products.pop(product_id)
        return {"message": "Product deleted successfully"}

    def generate_presigned_url(self, file_name, file_type, content_length=None):
        self.calls.append(("generate_presigned_url", file_name, file_type, content_length))
        self._check("generate_presigned_url")
        return {"presignedUrl": "https://signed", "s3Url": "https://bucket/products/x.png"}

    def upload_image(self, presigned_url, data, content_type):
        self.calls.append(("upload_image", presigned_url, content_type))
        self._check("upload_image")


RED_SHOE = {"id": "1", "name": "Red Shoe", "price": 10, "description": "", "image": "", "created_at": "2024-01-01T00:00:00Z", "updated_at": "2024-01-01T00:00:00Z"}
BLUE_HAT = {"id": "2", "name": "Blue Hat", "price": 20, "description": "", "image": "", "created_at": "2024-02-01T00:00:00Z", "updated_at": "2024-02-01T00:00:00Z"}


@pytest.fixture
def alerts():
    return []


def test_list_view_loads_and_sorts_newest_first():
    view = ProductListView(StubApi([RED_SHOE, BLUE_HAT]))
    view.load()
    assert [p["name"] for p in view.filtered_products] == ["Blue Hat", "Red Shoe"]
    assert view.summary == "2 of 2 products"
    assert view.loading is False


def test_list_view_refilters_on_every_change():
    view = ProductListView(StubApi([RED_SHOE, BLUE_HAT]))
    view.load()

    view.set_search_term("shoe")
    assert [p["name"] for p in view.filtered_products] == ["Red Shoe"]
    assert view.summary == "1 of 2 products"

    view.clear_search()
    view.set_sort_by("price")
    view.toggle_sort_order()
    assert [p["name"] for p in view.filtered_products] == ["Red Shoe", "Blue Hat"]


def test_list_view_empty_messages():
    view = ProductListView(StubApi([]))
    view.load()
    assert view.empty_message == "No products yet."
    view.set_search_term("x")
    assert view.empty_message == "No products found matching your search."


def test_list_view_load_failure_sets_error():
    view = ProductListView(StubApi(fail={"get_products"}))
    view.load()
    assert view.error == "Failed to load products. Please try again."
    assert view.loading is False


def test_list_view_delete_removes_record():
    api = StubApi([RED_SHOE, BLUE_HAT])
    view = ProductListView(api)
    view.load()

    assert view.delete("1") is True
    assert [p["id"] for p in view.filtered_products] == ["2"]
    assert view.deleting_ids == set()


def test_list_view_delete_needs_confirmation():
    api = StubApi([RED_SHOE])
    view = ProductListView(api, confirm=lambda message: False)
    view.load()
    assert view.delete("1") is False
    assert ("delete_product", "1") not in api.calls


def test_list_view_delete_failure_alerts_and_clears_marker(alerts):
    view = ProductListView(StubApi([RED_SHOE], fail={"delete_product"}), alert=alerts.append)
    view.load()

    assert view.delete("1") is False
    assert alerts == ["Failed to delete product. Please try again."]
    assert view.deleting_ids == set()
    assert len(view.products) == 1


def test_detail_view_load_and_labels():
    view = ProductDetailView(StubApi([{**RED_SHOE, "price": 1234.5, "created_at": "2024-01-05T15:04:00Z"}]))
    view.load("1")
    assert view.price_label == "$1,234.50"
    assert view.created_label == "January 5, 2024 at 03:04 PM"
    assert view.updated_label == "January 1, 2024 at 12:00 AM"


def test_detail_view_labels_are_empty_before_load():
    view = ProductDetailView(StubApi([]))
    assert view.price_label == ""
    assert view.created_label == ""
    assert view.updated_label == ""


def test_detail_view_missing_product():
    view = ProductDetailView(StubApi([]))
    view.load("nope")
    assert view.error == "Product not found or failed to load."
    assert view.product is None


def test_detail_view_delete_navigates_home():
    visited = []
    view = ProductDetailView(StubApi([RED_SHOE]), navigate=visited.append)
    view.load("1")
    assert view.delete() is True
    assert visited == ["/"]


def test_detail_view_delete_failure_alerts(alerts):
    visited = []
    view = ProductDetailView(StubApi([RED_SHOE], fail={"delete_product"}), alert=alerts.append, navigate=visited.append)
    view.load("1")
    assert view.delete() is False
    assert alerts == ["Failed to delete product. Please try again."]
    assert visited == []
    assert view.is_deleting is False


def test_create_view_validation():
    view = CreateProductView(StubApi())
    assert view.submit() is False
    assert view.errors == {"name": "Product name is required", "price": "Price must be greater than 0"}

    view.set_field("name", "Lamp")
    assert view.errors["name"] == ""


def test_create_view_submit_navigates_to_detail():
    visited = []
    api = StubApi()
    view = CreateProductView(api, navigate=visited.append)
    view.set_field("name", "Lamp")
    view.set_field("price", "12.5")

    assert view.submit() is True
    assert visited == ["/product/new-id"]
    assert api.calls[-1] == ("create_product", {"name": "Lamp", "price": 12.5, "description": "", "image": ""})
    assert view.is_submitting is False


def test_create_view_failure_alerts(alerts):
    view = CreateProductView(StubApi(fail={"create_product"}), alert=alerts.append)
    view.set_field("name", "Lamp")
    view.set_field("price", 3)
    assert view.submit() is False
    assert alerts == ["Failed to create product. Please try again."]


def test_edit_view_loads_form_and_updates():
    visited = []
    api = StubApi([RED_SHOE])
    view = EditProductView(api, navigate=visited.append)
    view.load("1")
    assert view.form == {"name": "Red Shoe", "price": 10, "description": "", "image": ""}

    view.set_field("price", 15)
    assert view.submit() is True
    assert api.products["1"]["price"] == 15
    assert visited == ["/product/1"]


def test_edit_view_failure_alerts(alerts):
    view = EditProductView(StubApi([RED_SHOE], fail={"update_product"}), alert=alerts.append)
    view.load("1")
    assert view.submit() is False
    assert alerts == ["Failed to update product. Please try again."]


def test_edit_view_without_product_does_not_submit():
    api = StubApi([])
    view = EditProductView(api)
    view.load("missing")
    assert view.error == "Product not found or failed to load."
    assert view.submit() is False


def test_image_upload_sets_form_image():
    api = StubApi()
    view = CreateProductView(api)
    uploader = view.image_uploader()

    assert uploader.select(ImageFile("shoe.png", "image/png", b"\x89PNG")) is True
    assert view.form["image"] == "https://bucket/products/x.png"
    assert ("generate_presigned_url", "shoe.png", "image/png", 4) in api.calls
    assert uploader.is_uploading is False


def test_image_upload_rejects_bad_type_and_size(alerts):
    api = StubApi()
    uploader = ImageUploader(api, on_uploaded=lambda url: None, alert=alerts.append)

    assert uploader.select(ImageFile("doc.pdf", "application/pdf", b"%PDF")) is False
    assert uploader.select(ImageFile("huge.png", "image/png", b"0" * (10 * 1024 * 1024 + 1))) is False
    assert alerts == [
        "Please select a valid image file (JPEG, PNG, GIF, or WebP)",
        "File size must be less than 10MB",
    ]
    assert api.calls == []


def test_image_upload_failure_restores_preview(alerts):
    reported = []
    uploader = ImageUploader(
        StubApi(fail={"upload_image"}), on_uploaded=reported.append, alert=alerts.append,
        current_image="https://bucket/products/old.png",
    )
    assert uploader.select(ImageFile("new.png", "image/png", b"data")) is False
    assert uploader.preview == "https://bucket/products/old.png"
    assert reported == []
    assert alerts == ["Failed to upload image. Please try again."]


def test_image_remove_reports_empty_url():
    reported = []
    uploader = ImageUploader(StubApi(), on_uploaded=reported.append, alert=print, current_image="https://x/y.png")
    uploader.remove()
    assert uploader.preview is None
    assert reported == [""]


def test_image_file_from_path(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff")
    image = ImageFile.from_path(str(path))
    assert image.name == "photo.jpg"
    assert image.content_type == "image/jpeg"
    assert image.size == 3


def test_formatters():
    assert format_price(0) == "$0.00"
    assert format_price("19.9") == "$19.90"
    assert format_date("2024-12-31T09:05:00Z") == "December 31, 2024 at 09:05 AM"


def test_form_view_needs_a_save_implementation():
    with pytest.raises(TypeError):
        ProductFormView(StubApi())
