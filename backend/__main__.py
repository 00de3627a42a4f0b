"""
Entry point for running the API with `python -m backend`.
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8002")),
        reload=os.environ.get("ENVIRONMENT", "development") == "development",
    )
