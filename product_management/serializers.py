from typing import List

from django.conf import settings
from django.db import transaction
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from .models import Product, ProductMedia, Category
from utils.image_opt import process_uploaded_file, validate_uploaded_file

import logging

logger = logging.getLogger("rest_framework")


# ---------------------------
# Category Serializer
# ---------------------------

class SimpleCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "parent"]


# ---------------------------
# Product Media Serializer
# ---------------------------

class ProductMediaSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for displaying product media.
    """
    class Meta:
        model = ProductMedia
        fields = ['id', 'image', 'position']


# ---------------------------
# Product Read Serializer
# ---------------------------

class ProductSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source='seller_id', read_only=True)
    images = ProductMediaSerializer(source='media', many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'user_id', 'title', 'description', 'price', 'category',
            'images', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'title', 'description', 'price', 'category', 'created_at', 'updated_at']


# ---------------------------
# Product Write Serializer
# ---------------------------

class ProductWriteSerializer(serializers.ModelSerializer):
    """
    Create and full-replace update of a product.

    Image files come from ``request.FILES['images']``. On create they become
    the product's media in upload order; on update, uploading any images
    replaces the whole set and uploading none keeps it.
    """
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )

    class Meta:
        model = Product
        fields = ['title', 'description', 'price', 'category']

    def _images(self) -> List:
        request = self.context.get('request')
        if request is None:
            return []
        return request.FILES.getlist('images')

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title must not be blank.")
        return value.strip()

    def validate(self, attrs):
        images = self._images()
        if len(images) > settings.PRODUCT_MAX_IMAGES:
            raise ValidationError(
                {"images": f"A product cannot have more than {settings.PRODUCT_MAX_IMAGES} images."}
            )
        for file in images:
            try:
                validate_uploaded_file(file)
            except ValidationError as exc:
                raise ValidationError({"images": exc.detail})
        return attrs

    def create(self, validated_data):
        images = self._process_images(self._images())
        with transaction.atomic():
            product = Product.objects.create(**validated_data)
            self._store_images(product, images)
        logger.info("Product %s created by %s.", product.pk, product.seller_id)
        return product

    def update(self, instance, validated_data):
        # Full replace: optional fields left out of the request are reset.
        validated_data.setdefault('description', '')
        validated_data.setdefault('category', None)
        images = self._process_images(self._images())

        with transaction.atomic():
            for attr, value in validated_data.items():
                setattr(instance, attr, value)
            instance.save()

            if images:
                instance.media.all().delete()
                self._store_images(instance, images)

        logger.info("Product %s updated.", instance.pk)
        return instance

    def _process_images(self, files):
        # Every file is optimized before the first one reaches storage.
        optimized = []
        for file in files:
            try:
                optimized.append(process_uploaded_file(file))
            except ValidationError as exc:
                raise ValidationError({"images": exc.detail})
        return optimized

    def _store_images(self, product, files):
        for position, file in enumerate(files):
            ProductMedia.objects.create(product=product, image=file, position=position)


# ---------------------------
# Query string serializers
# ---------------------------

class PageQuerySerializer(serializers.Serializer):
    """Shape check only; range checks live in the query engine."""
    size = serializers.IntegerField(required=False)
    last = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class SortedPageQuerySerializer(PageQuerySerializer):
    sort = serializers.CharField(required=False, allow_blank=True)


class ProductSearchQuerySerializer(SortedPageQuerySerializer):
    keyword = serializers.CharField(required=False, allow_blank=True)
    category = serializers.IntegerField(required=False)
