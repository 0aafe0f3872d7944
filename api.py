"""
FastAPI web application for SEO Analyzer
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, HttpUrl, field_validator
from typing import Dict, Any, Optional
import logging
from datetime import datetime
import uvicorn

from app import SEOAnalyzerApp

logger = logging.getLogger(__name__)

# Pydantic models for API requests
class HTMLAnalysisRequest(BaseModel):
    html: str
    url: HttpUrl

    @field_validator('html')
    @classmethod
    def html_must_not_be_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('HTML cannot be empty')
        return v

class URLAnalysisRequest(BaseModel):
    url: HttpUrl

# Response models
class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    timestamp: datetime

class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    components: Dict[str, Any]
    metrics: Dict[str, Any]

# Global analyzer app instance
analyzer_app = None

def get_analyzer_app() -> SEOAnalyzerApp:
    """Dependency to get the analyzer app instance"""
    global analyzer_app
    if analyzer_app is None:
        analyzer_app = SEOAnalyzerApp()
    return analyzer_app

@asynccontextmanager
async def lifespan(app: FastAPI):
    get_analyzer_app()
    logger.info("SEO Analyzer API started successfully")
    yield
    if analyzer_app is not None:
        analyzer_app.shutdown()
        logger.info("SEO Analyzer API shut down successfully")

# Initialize FastAPI app
app = FastAPI(
    title="SEO Analyzer API",
    description="Single page SEO audit API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API Endpoints

@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint"""
    return {
        "message": "SEO Analyzer API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health", response_model=HealthResponse)
async def health_check(analyzer: SEOAnalyzerApp = Depends(get_analyzer_app)):
    """Health check endpoint"""
    status = analyzer.get_system_status()
    return HealthResponse(
        status=status["health"]["overall_status"],
        timestamp=datetime.now(),
        components=status["health"]["components"],
        metrics=status["metrics"]
    )

@app.post("/analyze/html", response_model=APIResponse)
def analyze_html(
    request: HTMLAnalysisRequest,
    analyzer: SEOAnalyzerApp = Depends(get_analyzer_app)
):
    """Analyze HTML supplied in the request body"""
    logger.info(f"Analyzing submitted HTML for {request.url}")
    result = analyzer.analyze_html(request.html, str(request.url))

    if not result.get("success"):
        raise HTTPException(status_code=400, detail=result.get("error", "Analysis failed"))

    return APIResponse(
        success=True,
        message="HTML analysis completed",
        data=result,
        timestamp=datetime.now()
    )

@app.post("/analyze/url", response_model=APIResponse)
def analyze_url(
    request: URLAnalysisRequest,
    analyzer: SEOAnalyzerApp = Depends(get_analyzer_app)
):
    """Fetch and analyze a single URL"""
    logger.info(f"Analyzing URL: {request.url}")
    result = analyzer.analyze_url(str(request.url))

    if not result.get("success"):
        raise HTTPException(status_code=502, detail=result.get("error", "Fetch failed"))

    return APIResponse(
        success=True,
        message="URL analysis completed",
        data=result,
        timestamp=datetime.now()
    )

# Custom exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Turn unexpected analyzer failures into the APIResponse envelope"""
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": f"Internal server error while handling {request.url.path}",
            "data": None,
            "timestamp": datetime.now().isoformat()
        }
    )

if __name__ == "__main__":
    # Run the FastAPI app
    uvicorn.run(
        "api:app",
        host="127.0.0.1",
        port=8000,
        log_level="info"
    )
