"""
Server Entry Point

Minimal entry point that imports the FastAPI app and runs uvicorn.
"""

import logging
import os
from app import app

if __name__ == "__main__":
    import uvicorn
    from config import DEFAULT_PORT

    logging.basicConfig(level=logging.INFO)

    # Get port from environment variable or default to 8010
    port = int(os.environ.get("PORT", DEFAULT_PORT))

    print(f"Starting server on port {port}")
    print("REST API endpoints:")
    print(f"  - POST   http://localhost:{port}/api/fetch-sitemap")
    print(f"  - POST   http://localhost:{port}/api/research-keyword")
    print(f"  - POST   http://localhost:{port}/api/analyze-tone")
    print(f"  - POST   http://localhost:{port}/api/generate-content")
    print(f"  - POST   http://localhost:{port}/api/wizard")
    print(f"  - POST   http://localhost:{port}/api/wizard/{{wizard_id}}/advance")
    print(f"  - POST   http://localhost:{port}/api/wizard/{{wizard_id}}/generate")
    print(f"  - GET    http://localhost:{port}/api/admin/settings")
    print()

    uvicorn.run(app, host="0.0.0.0", port=port)
