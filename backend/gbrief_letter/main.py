"""
g-brief Letter Exporter - FastAPI Application

Main entry point for the letter export service.

Pipeline:
- Document tree (JSON) -> settings snapshot + tagged-content store
- Tree walk -> letter body, special headings routed to template slots
- Template assembly -> g-brief LaTeX source
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .routers import letters_router

# Create FastAPI app
app = FastAPI(
    title="g-brief Letter Exporter",
    description="""
    Exports parsed outline documents as LaTeX letters for the g-brief class.

    ## Sources per field
    1. Document keywords and #+OPTIONS: items
    2. Tagged headings (to, from, closing, ps, encl, cc, ...)
    3. Configured defaults (GBRIEF_* environment variables)

    Compiling the LaTeX output is left to the caller.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(letters_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "g-brief Letter Exporter",
        "version": __version__,
        "docs": "/docs",
        "endpoints": ["/letters/export", "/letters/options", "/letters/tags"],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# For running with: python -m gbrief_letter.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
