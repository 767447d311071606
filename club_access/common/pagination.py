from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ClubPagination(PageNumberPagination):
    """1-based ``?page=&limit=`` paging with the envelope the gate UI reads.

    ``{"data", "total", "page", "limit", "total_pages"}``
    """

    page_size = DEFAULT_LIMIT
    page_size_query_param = "limit"
    max_page_size = MAX_LIMIT

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response(
            {
                "data": data,
                "total": total,
                "page": self.page.number,
                "limit": limit,
                "total_pages": math.ceil(total / limit) if limit else 0,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["data", "total", "page", "limit", "total_pages"],
            "properties": {
                "data": schema,
                "total": {"type": "integer", "example": 42},
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": DEFAULT_LIMIT},
                "total_pages": {"type": "integer", "example": 5},
            },
        }
