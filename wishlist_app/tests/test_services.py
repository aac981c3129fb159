import uuid

from django.test import TestCase

from core.exceptions import NotFound
from product_management import services as product_services
from product_management.tests.factories import make_product, make_user
from wishlist_app.models import Wish
from wishlist_app.services import WishOutcome, add_wish, remove_wish


class AddWishTest(TestCase):

    def setUp(self):
        self.user = make_user()
        self.product = make_product(make_user())

    def test_add(self):
        self.assertEqual(add_wish(self.user.pk, self.product.pk), WishOutcome.ADDED)
        self.assertTrue(Wish.objects.filter(user=self.user, product=self.product).exists())

    def test_adding_twice_keeps_a_single_row(self):
        add_wish(self.user.pk, self.product.pk)
        self.assertEqual(add_wish(self.user.pk, self.product.pk), WishOutcome.ALREADY_EXISTS)
        self.assertEqual(Wish.objects.filter(user=self.user, product=self.product).count(), 1)

    def test_unknown_product(self):
        with self.assertRaises(NotFound):
            add_wish(self.user.pk, self.product.pk + 1000)
        self.assertFalse(Wish.objects.exists())

    def test_unknown_user(self):
        with self.assertRaises(NotFound):
            add_wish(uuid.uuid4(), self.product.pk)


class RemoveWishTest(TestCase):

    def setUp(self):
        self.user = make_user()
        seller = make_user()
        self.first = make_product(seller, title="First")
        self.second = make_product(seller, title="Second")

    def test_remove_never_added_pair(self):
        with self.assertRaises(NotFound):
            remove_wish(self.user.pk, self.first.pk)

    def test_remove_twice(self):
        add_wish(self.user.pk, self.first.pk)
        remove_wish(self.user.pk, self.first.pk)
        with self.assertRaises(NotFound):
            remove_wish(self.user.pk, self.first.pk)

    def test_listing_follows_toggles(self):
        add_wish(self.user.pk, self.first.pk)
        add_wish(self.user.pk, self.second.pk)
        remove_wish(self.user.pk, self.first.pk)

        page = product_services.list_wish_products(self.user.pk)
        self.assertEqual([p.id for p in page.products], [self.second.id])

    def test_other_users_wishes_are_untouched(self):
        other = make_user()
        add_wish(self.user.pk, self.first.pk)
        add_wish(other.pk, self.first.pk)
        remove_wish(self.user.pk, self.first.pk)
        self.assertTrue(Wish.objects.filter(user=other, product=self.first).exists())
