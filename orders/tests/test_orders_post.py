from decimal import Decimal
from unittest import mock

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from orders.exceptions import PersistenceError
from orders.models import Order
from orders.pricing import estimate_cost
from .factories import DOCX, pdf, stored_files, use_temp_upload_root


def payload(**overrides):
    data = {
        "fullName": "  Jane Doe  ",
        "phoneNumber": "0123456789",
        "printType": "color",
        "copies": "2",
        "selectedPages": "all",
    }
    data.update(overrides)
    return data


class OrderCreateTests(APITestCase):
    def setUp(self):
        self.url = reverse("order-list")
        self.upload_dir = use_temp_upload_root(self)

    def post(self, data, files=()):
        body = dict(data)
        if files:
            body["files"] = list(files)
        return self.client.post(self.url, body, format="multipart")

    def test_create_order_success_201(self):
        res = self.post(payload(), [pdf("brief.pdf")])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["message"], "Order created successfully")

        data = res.data["data"]
        self.assertEqual(set(data), {"orderId", "totalCost", "status", "id"})
        self.assertTrue(data["orderId"].startswith("ORD-"))
        self.assertEqual(data["totalCost"], Decimal("160"))
        self.assertEqual(data["status"], "pending")

        order = Order.objects.get(order_id=data["orderId"])
        self.assertEqual(order.id, data["id"])
        self.assertEqual(order.full_name, "Jane Doe")
        self.assertEqual(order.copies, 2)
        self.assertEqual(order.paper_size, "a4")
        self.assertEqual(order.print_side, "single")
        self.assertIsNone(order.binding_color_type)
        self.assertEqual(len(stored_files(self.upload_dir)), 1)

    def test_spiral_binding_with_selected_pages(self):
        res = self.post(
            payload(printType="spiralBinding", selectedPages="p1-p3", copies="1"),
            [pdf()],
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["data"]["totalCost"], Decimal("32.5"))

    def test_custom_print_costs_nothing(self):
        res = self.post(payload(printType="customPrint"), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["data"]["totalCost"], Decimal("0"))

    def test_files_keep_submission_order(self):
        names = ["a.pdf", "b.docx", "c.pdf"]
        uploads = [pdf(names[0]), pdf(names[1], content_type=DOCX), pdf(names[2])]
        res = self.post(payload(printType="blackAndWhite", copies="3"), uploads)
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

        order = Order.objects.get(order_id=res.data["data"]["orderId"])
        files = list(order.files.all())
        self.assertEqual([f.original_name for f in files], names)
        self.assertEqual(len({f.name for f in files}), 3)
        self.assertEqual(files[1].type, DOCX)
        self.assertEqual(order.total_cost, estimate_cost("blackAndWhite", "all", 3))
        self.assertEqual(len(stored_files(self.upload_dir)), 3)

    def test_same_original_names_do_not_overwrite(self):
        res = self.post(payload(), [pdf("same.pdf", b"one"), pdf("same.pdf", b"two")])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(stored_files(self.upload_dir)), 2)

    def test_missing_files_400_and_nothing_stored(self):
        res = self.post(payload())
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(res.data["success"])
        self.assertIn("At least one file is required", res.data["details"])
        self.assertEqual(stored_files(self.upload_dir), [])
        self.assertEqual(Order.objects.count(), 0)

    def test_invalid_file_type_400(self):
        res = self.post(payload(), [pdf("notes.txt", b"hello", content_type="text/plain")])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Invalid file type", res.data["message"])
        self.assertEqual(stored_files(self.upload_dir), [])

    def test_one_bad_file_rejects_whole_batch(self):
        res = self.post(
            payload(), [pdf("ok.pdf"), pdf("image.png", b"png", content_type="image/png")]
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(stored_files(self.upload_dir), [])

    @override_settings(ORDER_MAX_FILE_SIZE=10)
    def test_file_too_large_400(self):
        res = self.post(payload(), [pdf(content=b"x" * 11)])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("File too large", res.data["message"])
        self.assertEqual(stored_files(self.upload_dir), [])

    @override_settings(ORDER_MAX_FILES=2)
    def test_too_many_files_400(self):
        res = self.post(payload(), [pdf("1.pdf"), pdf("2.pdf"), pdf("3.pdf")])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Too many files", res.data["message"])
        self.assertEqual(stored_files(self.upload_dir), [])

    def test_missing_full_name_400(self):
        data = payload()
        del data["fullName"]
        res = self.post(data, [pdf()])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], "Validation error")
        self.assertIn("fullName", res.data["details"])
        self.assertEqual(stored_files(self.upload_dir), [])

    def test_invalid_print_type_400(self):
        res = self.post(payload(printType="hologram"), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("printType", res.data["details"])

    def test_invalid_copies_400(self):
        res = self.post(payload(copies="0"), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("copies", res.data["details"])

    def test_blank_selected_pages_400(self):
        res = self.post(payload(selectedPages=""), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], "Validation error")
        self.assertIn("selectedPages", res.data["details"])
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(stored_files(self.upload_dir), [])

    def test_omitted_selected_pages_defaults_to_all(self):
        data = payload(copies="1")
        del data["selectedPages"]
        res = self.post(data, [pdf()])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["data"]["totalCost"], Decimal("80"))
        order = Order.objects.get(order_id=res.data["data"]["orderId"])
        self.assertEqual(order.selected_pages, "all")

    def test_overlong_extension_is_dropped_201(self):
        res = self.post(payload(), [pdf("a." + "x" * 240)])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(order_id=res.data["data"]["orderId"])
        stored = order.files.get()
        self.assertEqual(stored.original_name, "a." + "x" * 240)
        self.assertNotIn(".", stored.name)

    def test_special_instructions_too_long_400(self):
        res = self.post(payload(specialInstructions="x" * 1001), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(APP_ENV="production")
    def test_persistence_failure_500_removes_files(self):
        with mock.patch(
            "orders.repository.OrderRepository.insert",
            side_effect=PersistenceError("Failed to create order"),
        ):
            res = self.post(payload(), [pdf("a.pdf"), pdf("b.pdf")])
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(res.data["success"])
        self.assertEqual(res.data["message"], "Failed to create order")
        self.assertEqual(res.data["error"], "Internal server error")
        self.assertEqual(stored_files(self.upload_dir), [])
        self.assertEqual(Order.objects.count(), 0)

    @override_settings(APP_ENV="development")
    def test_error_detail_shown_in_development(self):
        with mock.patch(
            "orders.repository.OrderRepository.insert",
            side_effect=RuntimeError("database unreachable"),
        ):
            res = self.post(payload(), [pdf()])
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "database unreachable")
        self.assertEqual(stored_files(self.upload_dir), [])
