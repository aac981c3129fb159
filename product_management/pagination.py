from rest_framework import pagination
from rest_framework.response import Response

from .sorting import SortKey


class ProductCursorPagination(pagination.BasePagination):
    """
    Response envelope for product pages produced by ``services.paginate``.

    The engine does the slicing; this class only renders a ``ProductPage``
    and documents the ``size`` / ``last`` / ``sort`` parameters for the schema.
    """
    page_size_query_param = 'size'
    cursor_query_param = 'last'
    sort_query_param = 'sort'
    sortable = True

    page = None

    def paginate_page(self, page):
        self.page = page
        return page.products

    def get_paginated_response(self, data, **extra):
        return Response({
            **extra,
            'size': self.page.size,
            'next': self.page.next_cursor,
            'has_more': self.page.has_more,
            'products': data,
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['size', 'next', 'has_more', 'products'],
            'properties': {
                'size': {'type': 'integer', 'example': 10},
                'next': {
                    'type': 'string',
                    'nullable': True,
                    'description': "Pass as `last` to fetch the following page.",
                    'example': '1500:42',
                },
                'has_more': {'type': 'boolean'},
                'products': schema,
            },
        }

    def get_schema_operation_parameters(self, view):
        parameters = [
            {
                'name': self.page_size_query_param,
                'required': False,
                'in': 'query',
                'description': 'Number of products per page (default 10).',
                'schema': {'type': 'integer'},
            },
            {
                'name': self.cursor_query_param,
                'required': False,
                'in': 'query',
                'description': "Cursor from the previous page's `next`.",
                'schema': {'type': 'string'},
            },
        ]
        if getattr(view, 'sortable', self.sortable):
            parameters.append({
                'name': self.sort_query_param,
                'required': False,
                'in': 'query',
                'description': 'Listing order; unknown values fall back to `iddesc`.',
                'schema': {'type': 'string', 'enum': SortKey.values},
            })
        return parameters
