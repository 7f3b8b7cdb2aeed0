"""
Endpoint Catalog

Static table of every supported Intrinio operation. Each entry binds an
operation name to its path, HTTP method, request descriptor type and
response model/shape. The dispatcher is generic over this table; adding an
endpoint means adding a descriptor, a response model and one entry here.

Endpoints:
    Master data:    /companies/master, /securities/master, /indices/master, /owners/master
    Details:        /companies, /securities, /indices
    Search:         /securities/search, /data_point, /historical_data
    Prices:         /prices
    Filings:        /companies/filings
    Fundamentals:   /fundamentals/standardized
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Type

from pydantic import BaseModel

from core import schemas
from intrinio import messages
from intrinio.decoder import ResponseShape


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class EndpointBinding:
    """
    Static metadata of one remote operation.

    Attributes:
        name: Operation name (catalog key)
        path: Path appended to the base URL (no placeholders)
        method: GET (query string) or POST (form body)
        request_type: Request descriptor class accepted by this endpoint
        response_type: Pydantic model of one response item
        shape: Top-level response shape (object, list or page)
    """

    name: str
    path: str
    method: HttpMethod
    request_type: Type[BaseModel]
    response_type: Type[BaseModel]
    shape: ResponseShape


def _binding(name, path, request_type, response_type, shape, method=HttpMethod.GET) -> EndpointBinding:
    return EndpointBinding(
        name=name,
        path=path,
        method=method,
        request_type=request_type,
        response_type=response_type,
        shape=shape
    )


_BINDINGS = [
    # Master data feed
    _binding("companies_master_list", "/companies/master",
             messages.GetCompaniesMasterList, schemas.CompanySummary, ResponseShape.PAGE),
    _binding("securities_master_list", "/securities/master",
             messages.GetSecuritiesMasterList, schemas.SecuritySummary, ResponseShape.PAGE),
    _binding("indices_master_list", "/indices/master",
             messages.GetIndicesMasterList, schemas.IndexSummary, ResponseShape.PAGE),
    _binding("owners_master_list", "/owners/master",
             messages.GetOwnersMasterList, schemas.OwnerSummary, ResponseShape.PAGE),

    # U.S. public company data feed
    _binding("company_details", "/companies",
             messages.GetCompanyDetails, schemas.CompanyDetails, ResponseShape.OBJECT),
    _binding("security_details", "/securities",
             messages.GetSecurityDetails, schemas.SecurityDetails, ResponseShape.OBJECT),
    _binding("index_details", "/indices",
             messages.GetIndexDetails, schemas.IndexDetails, ResponseShape.OBJECT),
    _binding("securities_search", "/securities/search",
             messages.SearchSecurities, schemas.SecurityScreenResult, ResponseShape.PAGE),
    _binding("data_point", "/data_point",
             messages.SearchDataPoints, schemas.DataPoint, ResponseShape.PAGE),
    _binding("historical_data", "/historical_data",
             messages.SearchHistoricalData, schemas.HistoricalData, ResponseShape.PAGE),
    _binding("prices", "/prices",
             messages.GetPrices, schemas.Price, ResponseShape.OBJECT),
    _binding("company_sec_filings", "/companies/filings",
             messages.GetCompanySecFilings, schemas.CompanySecFiling, ResponseShape.LIST),
    _binding("standardized_fundamentals", "/fundamentals/standardized",
             messages.GetStandardizedFundamentals, schemas.StandardizedFundamental, ResponseShape.LIST),
]

ENDPOINTS: Mapping[str, EndpointBinding] = MappingProxyType({b.name: b for b in _BINDINGS})


def get_binding(name: str) -> EndpointBinding:
    """
    Look up an endpoint binding by operation name.

    Raises:
        KeyError: If the operation is not in the catalog
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(
            f"Unknown operation '{name}'. Known operations: {', '.join(sorted(ENDPOINTS))}"
        ) from None


def binding_for_request(request: BaseModel) -> EndpointBinding:
    """
    Find the binding whose request type matches the descriptor's class.

    Raises:
        KeyError: If no endpoint accepts this descriptor type
    """
    for binding in ENDPOINTS.values():
        if type(request) is binding.request_type:
            return binding
    raise KeyError(f"No endpoint accepts request type {type(request).__name__}")
