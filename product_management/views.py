from rest_framework import viewsets, generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from drf_spectacular.utils import (
    extend_schema, extend_schema_view, OpenApiParameter, OpenApiResponse, OpenApiTypes
)
import logging

from core.exceptions import InvalidArgument, ValidationFailed
from users.authentication import JWTAuthentication
from utils.identifiers import parse_product_id, parse_user_id
from . import services
from .models import Category
from .pagination import ProductCursorPagination
from .permissions import IsProductOwner, check_ownership
from .serializers import (
    ProductSerializer,
    ProductWriteSerializer,
    ProductSearchQuerySerializer,
    SortedPageQuerySerializer,
    SimpleCategorySerializer,
)

logger = logging.getLogger("rest_framework")


def parse_query(serializer_class, request):
    """Validate query parameters; shape errors are a 400 before any query runs."""
    query = serializer_class(data=request.query_params)
    if not query.is_valid():
        raise InvalidArgument(query.errors)
    return query.validated_data


def save_product(serializer, **kwargs):
    """Content errors surface as 422 with per-field detail."""
    if not serializer.is_valid():
        raise ValidationFailed(serializer.errors)
    try:
        return serializer.save(**kwargs)
    except ValidationError as exc:
        raise ValidationFailed(exc.detail)


# -------------------------------------------------
# Product CRUD viewSet
# -------------------------------------------------
@extend_schema_view(
    list=extend_schema(
        summary="List Products",
        description=(
            "Cursor-paginated listing of all products. `keyword` matches the title "
            "(case-insensitive substring), `category` filters on the category id. "
            "Pass the `next` value of a page as `last` to get the following page."
        ),
        parameters=[
            OpenApiParameter(
                name="keyword",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Substring of the product title."
            ),
            OpenApiParameter(
                name="category",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Category id."
            ),
        ]
    ),
    retrieve=extend_schema(
        summary="Retrieve Product",
        description="Retrieve a single product with its images."
    ),
    create=extend_schema(
        summary="Create Product",
        request=ProductWriteSerializer,
        responses={201: ProductSerializer},
        description=(
            "Create a product owned by the logged-in user. Send multipart/form-data with "
            "`title`, `price`, optional `description` and `category`, and one or more files "
            "under `images`. An optional `user_id` must name the logged-in user."
        ),
    ),
    update=extend_schema(
        summary="Replace Product",
        request=ProductWriteSerializer,
        responses={200: ProductSerializer},
        description=(
            "Full replace of a product's fields by its owner. Omitted optional fields are "
            "cleared. Uploading `images` replaces all images; uploading none keeps them."
        ),
    ),
    destroy=extend_schema(
        summary="Delete Product",
        responses={200: OpenApiResponse(description="Product deleted")},
        description="Delete a product along with its images and any wishes for it."
    ),
)
class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for managing products.

    GET requests are public. POST/PUT/DELETE need a logged-in actor; only
    the seller may replace or delete a product.
    """

    serializer_class = ProductSerializer
    pagination_class = ProductCursorPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']

    def get_authenticators(self):
        if self.request and self.request.method == 'GET':
            return []  # Public access for GET requests.
        return [JWTAuthentication()]

    def get_permissions(self):
        if self.request and self.request.method in ['POST', 'PUT', 'DELETE']:
            return [IsAuthenticated(), IsProductOwner()]
        return [AllowAny()]

    def get_queryset(self):
        return services.base_queryset()

    def get_object(self):
        product = services.get_product(parse_product_id(self.kwargs[self.lookup_field]))
        self.check_object_permissions(self.request, product)
        return product

    def list(self, request, *args, **kwargs):
        page = services.list_products(**parse_query(ProductSearchQuerySerializer, request))
        products = self.paginator.paginate_page(page)
        serializer = self.get_serializer(products, many=True)
        return self.paginator.get_paginated_response(serializer.data)

    def create(self, request, *args, **kwargs):
        if not request.FILES.getlist('images'):
            raise InvalidArgument({"images": "At least one product image is required."})

        declared_owner = request.data.get('user_id') or request.user.pk
        check_ownership(request.user.pk, declared_owner)

        serializer = ProductWriteSerializer(data=request.data, context=self.get_serializer_context())
        product = save_product(serializer, seller=request.user)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        product = self.get_object()

        # The seller of a product never changes.
        declared_owner = request.data.get('user_id')
        if declared_owner:
            check_ownership(declared_owner, product.seller_id)

        serializer = ProductWriteSerializer(
            product, data=request.data, context=self.get_serializer_context()
        )
        product = save_product(serializer)
        return Response(ProductSerializer(services.get_product(product.pk)).data)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        services.delete_product(product)
        return Response({"detail": "Product deleted."}, status=status.HTTP_200_OK)


class UserProductListAPIView(generics.GenericAPIView):
    """
    GET /users/{userId}/products/: products listed by one user, cursor-paginated.
    """
    serializer_class = ProductSerializer
    pagination_class = ProductCursorPagination
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(summary="List User Products", responses={200: ProductSerializer(many=True)})
    def get(self, request, user_id):
        user_id = parse_user_id(user_id)
        page = services.list_user_products(user_id, **parse_query(SortedPageQuerySerializer, request))
        products = self.paginator.paginate_page(page)
        serializer = self.get_serializer(products, many=True)
        return self.paginator.get_paginated_response(serializer.data, user_id=str(user_id))


class ParentCategoryListAPIView(generics.ListAPIView):
    """
    API endpoint to retrieve top-level categories, for building the
    category filter of the product listing.
    """
    serializer_class = SimpleCategorySerializer
    authentication_classes = []
    permission_classes = [AllowAny]

    def get_queryset(self):
        # Return only parent categories.
        return Category.objects.filter(parent__isnull=True)
