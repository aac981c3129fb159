import uuid
from unittest import mock

from django.core.files.storage import default_storage
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APITestCase

from product_management import serializers as product_serializers
from product_management.models import Product, ProductMedia
from product_management.tests.factories import (
    attach_image, make_category, make_image, make_product, make_user,
)


def list_url():
    return reverse('products-list')


def detail_url(product_id):
    return reverse('products-detail', kwargs={'pk': product_id})


def user_products_url(user_id):
    return reverse('user-products', kwargs={'user_id': user_id})


def stored_images():
    try:
        return set(default_storage.listdir('product_images')[1])
    except FileNotFoundError:
        return set()


class ProductListViewTest(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.seller = make_user()
        cls.category = make_category("Garden")
        cls.products = [
            make_product(cls.seller, title="Shovel", price=30, category=cls.category),
            make_product(cls.seller, title="Rake", price=30),
            make_product(cls.seller, title="Hose", price=10),
        ]

    def test_size_is_the_requested_size(self):
        response = self.client.get(list_url(), {'size': 10})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['size'], 10)
        self.assertEqual(len(response.data['products']), 3)
        self.assertFalse(response.data['has_more'])
        self.assertIsNone(response.data['next'])

    def test_next_cursor_fetches_the_following_page(self):
        first = self.client.get(list_url(), {'size': 2, 'sort': 'price'})
        self.assertTrue(first.data['has_more'])
        self.assertEqual(first.data['next'], f"30:{self.products[0].id}")

        second = self.client.get(list_url(), {'size': 2, 'sort': 'price', 'last': first.data['next']})
        ids = [p['id'] for p in first.data['products'] + second.data['products']]
        self.assertEqual(ids, [self.products[2].id, self.products[0].id, self.products[1].id])

    def test_filters(self):
        response = self.client.get(list_url(), {'keyword': 'sho', 'category': self.category.id})
        self.assertEqual([p['id'] for p in response.data['products']], [self.products[0].id])

    def test_product_shape(self):
        response = self.client.get(list_url(), {'size': 1})
        product = response.data['products'][0]
        self.assertEqual(product['user_id'], str(self.seller.id))
        self.assertEqual(
            set(product),
            {'id', 'user_id', 'title', 'description', 'price', 'category', 'images', 'created_at', 'updated_at'},
        )

    def test_malformed_query_parameters_are_400(self):
        for params in ({'size': 'ten'}, {'size': 0}, {'size': 1000}, {'category': 'garden'},
                       {'last': 'abc'}, {'last': ''}, {'sort': 'price', 'last': '12'}):
            with self.subTest(params=params):
                response = self.client.get(list_url(), params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_oversized_cursor_is_400(self):
        huge = "9" * 5000
        for params in ({'last': huge}, {'sort': 'price', 'last': f"{huge}:1"}):
            with self.subTest(sort=params.get('sort', 'iddesc')):
                response = self.client.get(list_url(), params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_no_match_is_empty_page(self):
        response = self.client.get(list_url(), {'keyword': 'tractor'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['products'], [])


class ProductRetrieveViewTest(APITestCase):

    def test_retrieve(self):
        product = make_product(make_user(), title="Kettle")
        attach_image(product)
        response = self.client.get(detail_url(product.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], "Kettle")
        self.assertEqual(len(response.data['images']), 1)

    def test_missing_is_404(self):
        self.assertEqual(self.client.get(detail_url(98765)).status_code, status.HTTP_404_NOT_FOUND)

    def test_malformed_id_is_400(self):
        self.assertEqual(self.client.get(detail_url('abc')).status_code, status.HTTP_400_BAD_REQUEST)

    def test_oversized_id_is_400(self):
        for product_id in ("9" * 5000, "9" * 19):
            with self.subTest(digits=len(product_id)):
                response = self.client.get(detail_url(product_id))
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UserProductListViewTest(APITestCase):

    def test_lists_one_users_products(self):
        alice, bob = make_user(), make_user()
        cheap = make_product(alice, price=5)
        dear = make_product(alice, price=50)
        make_product(bob, price=1)

        response = self.client.get(user_products_url(alice.id), {'sort': 'pricedesc'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_id'], str(alice.id))
        self.assertEqual([p['id'] for p in response.data['products']], [dear.id, cheap.id])

    def test_unknown_user_is_empty(self):
        response = self.client.get(user_products_url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['products'], [])

    def test_malformed_user_id_is_400(self):
        response = self.client.get(user_products_url('not-a-uuid'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ProductCreateViewTest(APITestCase):

    def setUp(self):
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def payload(self, **overrides):
        data = {'title': 'Desk', 'price': 120, 'images': [make_image('a.png'), make_image('b.png')]}
        data.update(overrides)
        return data

    def test_create(self):
        category = make_category("Furniture")
        response = self.client.post(list_url(), self.payload(category=category.id), format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = Product.objects.get(pk=response.data['id'])
        self.assertEqual(product.seller, self.user)
        self.assertEqual(product.category, category)
        self.assertEqual(list(product.media.values_list('position', flat=True)), [0, 1])

    def test_declared_owner_must_be_the_actor(self):
        response = self.client.post(list_url(), self.payload(user_id=str(make_user().id)), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Product.objects.exists())

    def test_declared_owner_matching_actor_is_accepted(self):
        response = self.client.post(list_url(), self.payload(user_id=str(self.user.id)), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_no_images_is_400(self):
        response = self.client.post(list_url(), {'title': 'Desk', 'price': 120}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Product.objects.exists())

    def test_invalid_content_is_422_with_field_detail(self):
        response = self.client.post(list_url(), self.payload(title='', price=-5), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn('title', response.data)
        self.assertIn('price', response.data)

    def test_non_image_upload_is_422(self):
        from django.core.files.uploadedfile import SimpleUploadedFile
        bogus = SimpleUploadedFile('notes.png', b'plain text', content_type='image/png')
        response = self.client.post(list_url(), self.payload(images=[bogus]), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn('images', response.data)

    def test_failed_image_leaves_no_stored_files(self):
        optimize = product_serializers.process_uploaded_file
        calls = []

        def fail_on_second(file):
            calls.append(file)
            if len(calls) == 2:
                raise ValidationError("Failed to optimize image: truncated data")
            return optimize(file)

        before = stored_images()
        with mock.patch.object(product_serializers, 'process_uploaded_file', side_effect=fail_on_second):
            response = self.client.post(list_url(), self.payload(), format='multipart')

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn('images', response.data)
        self.assertFalse(Product.objects.exists())
        self.assertEqual(stored_images(), before)

    def test_too_many_images_is_422(self):
        images = [make_image(f'{i}.png') for i in range(7)]
        response = self.client.post(list_url(), self.payload(images=images), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)

    def test_anonymous_is_forbidden(self):
        self.client.force_authenticate(None)
        response = self.client.post(list_url(), self.payload(), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ProductUpdateDeleteViewTest(APITestCase):

    def setUp(self):
        self.owner = make_user()
        self.category = make_category("Music")
        self.product = make_product(
            self.owner, title="Guitar", price=300, category=self.category, description="Six strings",
        )
        self.media = attach_image(self.product)

    def test_full_replace_round_trip(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(
            detail_url(self.product.id), {'title': 'Bass', 'price': 350}, format='multipart',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        fetched = self.client.get(detail_url(self.product.id)).data
        self.assertEqual(fetched['title'], 'Bass')
        self.assertEqual(fetched['price'], 350)
        # Omitted optional fields are cleared; images are kept when none are uploaded.
        self.assertEqual(fetched['description'], '')
        self.assertIsNone(fetched['category'])
        self.assertEqual([m['id'] for m in fetched['images']], [self.media.id])
        self.assertEqual(fetched['user_id'], str(self.owner.id))

    def test_uploading_images_replaces_them(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(
            detail_url(self.product.id),
            {'title': 'Guitar', 'price': 300, 'images': [make_image('new.png')]},
            format='multipart',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(ProductMedia.objects.filter(pk=self.media.pk).exists())
        self.assertEqual(self.product.media.count(), 1)

    def test_update_requires_full_representation(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(detail_url(self.product.id), {'title': 'Bass'}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)

    def test_owner_cannot_be_reassigned(self):
        self.client.force_authenticate(self.owner)
        response = self.client.put(
            detail_url(self.product.id),
            {'title': 'Bass', 'price': 1, 'user_id': str(make_user().id)},
            format='multipart',
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.product.refresh_from_db()
        self.assertEqual(self.product.title, 'Guitar')

    def test_foreign_actor_cannot_update(self):
        self.client.force_authenticate(make_user())
        response = self.client.put(
            detail_url(self.product.id), {'title': 'Stolen', 'price': 1}, format='multipart',
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.product.refresh_from_db()
        self.assertEqual((self.product.title, self.product.price), ('Guitar', 300))

    def test_foreign_actor_cannot_delete(self):
        self.client.force_authenticate(make_user())
        response = self.client.delete(detail_url(self.product.id))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Product.objects.filter(pk=self.product.pk).exists())

    def test_missing_product_is_404_not_403(self):
        self.client.force_authenticate(make_user())
        self.assertEqual(self.client.delete(detail_url(99999)).status_code, status.HTTP_404_NOT_FOUND)

    def test_owner_deletes(self):
        self.client.force_authenticate(self.owner)
        response = self.client.delete(detail_url(self.product.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Product.objects.filter(pk=self.product.pk).exists())
        self.assertFalse(ProductMedia.objects.filter(pk=self.media.pk).exists())

    def test_patch_is_not_offered(self):
        self.client.force_authenticate(self.owner)
        response = self.client.patch(detail_url(self.product.id), {'title': 'x'}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)


class CategoryListViewTest(APITestCase):

    def test_lists_top_level_categories(self):
        parent = make_category("Home")
        make_category("Kitchen", parent=parent)
        response = self.client.get(reverse('parent-categories'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['name'] for c in response.data], ["Home"])
