from unittest import mock

from django.db import OperationalError
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from core.exceptions import (
    AlreadyExists, InvalidCursor, StoreUnavailable, ValidationFailed, api_exception_handler,
)


class ExceptionStatusTest(SimpleTestCase):

    def test_status_codes(self):
        self.assertEqual(InvalidCursor().status_code, 400)
        self.assertEqual(AlreadyExists().status_code, 403)
        self.assertEqual(ValidationFailed({"price": ["bad"]}).status_code, 422)
        self.assertEqual(StoreUnavailable().status_code, 503)

    def test_database_error_maps_to_store_unavailable(self):
        with self.assertLogs('rest_framework', level='ERROR'):
            response = api_exception_handler(OperationalError("disk full"), {})
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['detail'], "disk full")

    def test_unknown_error_keeps_its_message(self):
        with self.assertLogs('rest_framework', level='ERROR'):
            response = api_exception_handler(KeyError("price"), {})
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertIn("price", response.data['detail'])


class ExceptionHandlerViewTest(APITestCase):

    @mock.patch('product_management.services.list_products',
                side_effect=OperationalError("connection refused"))
    def test_store_failure_is_503(self, _):
        with self.assertLogs('rest_framework', level='ERROR'):
            response = self.client.get(reverse('products-list'))
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['detail'], "connection refused")

    @mock.patch('product_management.services.list_products', side_effect=RuntimeError("boom"))
    def test_generic_failure_is_500_with_message(self, _):
        with self.assertLogs('rest_framework', level='ERROR'):
            response = self.client.get(reverse('products-list'))
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"detail": "boom"})
