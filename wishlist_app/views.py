from rest_framework import status, generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import (
    extend_schema, OpenApiResponse
)

from core.exceptions import AlreadyExists
from product_management import services as product_services
from product_management.pagination import ProductCursorPagination
from product_management.serializers import ProductSerializer, PageQuerySerializer
from product_management.views import parse_query
from utils.identifiers import parse_product_id, parse_user_id
from .services import WishOutcome, add_wish, remove_wish


class WishProductListAPIView(generics.GenericAPIView):
    """
    GET /users/{userId}/products_wish/: the user's wished-for products,
    newest product first, cursor-paginated with `size` and `last`.
    """
    serializer_class = ProductSerializer
    pagination_class = ProductCursorPagination
    authentication_classes = []
    permission_classes = [AllowAny]
    sortable = False

    @extend_schema(summary="List Wished Products", responses={200: ProductSerializer(many=True)})
    def get(self, request, user_id):
        user_id = parse_user_id(user_id)
        page = product_services.list_wish_products(user_id, **parse_query(PageQuerySerializer, request))
        products = self.paginator.paginate_page(page)
        serializer = self.get_serializer(products, many=True)
        return self.paginator.get_paginated_response(serializer.data, user_id=str(user_id))


class WishAPIView(APIView):
    """
    POST   /users/{userId}/products/{productId}/wish/: add the product to the wishlist.
    DELETE /users/{userId}/products/{productId}/wish/: remove it again.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        request=None,
        responses={
            201: OpenApiResponse(description="Product added to the wishlist"),
            400: OpenApiResponse(description="Malformed user or product id"),
            403: OpenApiResponse(description="Product already in the wishlist"),
            404: OpenApiResponse(description="User or product not found"),
        },
    )
    def post(self, request, user_id, product_id):
        user_id = parse_user_id(user_id)
        product_id = parse_product_id(product_id)

        if add_wish(user_id, product_id) == WishOutcome.ALREADY_EXISTS:
            raise AlreadyExists("Product already in wishlist.")

        return Response(
            {"detail": "Product added to wishlist.", "user_id": str(user_id), "product_id": product_id},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=None,
        responses={
            200: OpenApiResponse(description="Product removed from the wishlist"),
            400: OpenApiResponse(description="Malformed user or product id"),
            404: OpenApiResponse(description="Product not in the wishlist"),
        },
    )
    def delete(self, request, user_id, product_id):
        user_id = parse_user_id(user_id)
        product_id = parse_product_id(product_id)

        remove_wish(user_id, product_id)

        return Response(
            {"detail": "Product removed from wishlist.", "user_id": str(user_id), "product_id": product_id},
            status=status.HTTP_200_OK,
        )
