"""
Intrinio API Client Package

Async client for the Intrinio financial market data API (https://api.intrinio.com).

Structure:
    intrinio/
    ├── __init__.py      # This file (public exports)
    ├── messages.py      # Request descriptors, one per endpoint
    ├── encoder.py       # Descriptor -> query string / form body
    ├── decoder.py       # Response body -> typed payload
    ├── errors.py        # ApiError, ApiResult and failure translation
    ├── catalog.py       # Endpoint bindings (path, method, request/response types)
    ├── api_client.py    # Generic dispatcher with Basic Auth over aiohttp
    └── client.py        # One method per endpoint

Usage:
    from intrinio import IntrinioClient

    async with IntrinioClient("user", "secret") as client:
        result = await client.get_prices(identifier="AAPL")
        print(result.unwrap().close)
"""

from intrinio.api_client import IntrinioAPIClient
from intrinio.catalog import ENDPOINTS, EndpointBinding, HttpMethod, get_binding
from intrinio.client import IntrinioClient
from intrinio.decoder import ResponseShape
from intrinio.errors import ApiError, ApiResult, ErrorKind, FieldError, IntrinioAPIException
from intrinio.messages import (
    FinancialStatement,
    Frequency,
    GetCompaniesMasterList,
    GetCompanyDetails,
    GetCompanySecFilings,
    GetIndexDetails,
    GetIndicesMasterList,
    GetOwnersMasterList,
    GetPrices,
    GetSecuritiesMasterList,
    GetSecurityDetails,
    GetStandardizedFundamentals,
    IndexType,
    OwnerType,
    PeriodType,
    SearchDataPoints,
    SearchHistoricalData,
    SearchOperator,
    SearchSecurities,
    SecuritiesSearchCondition,
    SortOrder,
)

__all__ = [
    "IntrinioAPIClient",
    "IntrinioClient",
    "ENDPOINTS",
    "EndpointBinding",
    "HttpMethod",
    "ResponseShape",
    "get_binding",
    "ApiError",
    "ApiResult",
    "ErrorKind",
    "FieldError",
    "IntrinioAPIException",
    "FinancialStatement",
    "Frequency",
    "IndexType",
    "OwnerType",
    "PeriodType",
    "SearchOperator",
    "SortOrder",
    "GetCompaniesMasterList",
    "GetCompanyDetails",
    "GetCompanySecFilings",
    "GetIndexDetails",
    "GetIndicesMasterList",
    "GetOwnersMasterList",
    "GetPrices",
    "GetSecuritiesMasterList",
    "GetSecurityDetails",
    "GetStandardizedFundamentals",
    "SearchDataPoints",
    "SearchHistoricalData",
    "SearchSecurities",
    "SecuritiesSearchCondition",
]
