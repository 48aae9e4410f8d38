# models/requests.py
"""
API request and response models
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime

from .course import CamelModel
from .search import ScoredCandidate, SearchInsights, CategoryAnalytics


class SearchData(CamelModel):
    """Payload of a successful search"""

    courses: List[ScoredCandidate] = Field(default_factory=list)
    total_results: int = 0
    search_query: str
    insights: SearchInsights
    suggestions: List[str] = Field(default_factory=list)


class SearchResponse(CamelModel):
    """Response for the search endpoint"""

    success: bool = True
    message: str
    data: SearchData


class SuggestionResponse(CamelModel):
    """Response for the autocomplete endpoint"""

    success: bool = True
    suggestions: List[str] = Field(default_factory=list)


class AnalyticsResponse(CamelModel):
    """Response for the analytics endpoint"""

    success: bool = True
    analytics: List[CategoryAnalytics] = Field(default_factory=list)


class FailureResponse(CamelModel):
    """Failure envelope returned by the search endpoints"""

    success: bool = False
    message: str


class HealthCheckResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    environment: str
    services: Dict[str, str]  # service_name -> status
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response"""

    error: str
    message: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
