"""
Run the bracket builder API with uvicorn.

Set PORT to change the port and API_RELOAD=0 to disable auto-reload.
"""

import os
import sys

import uvicorn

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("API_RELOAD", "1") not in ("0", "false", "no")

    print("=" * 60)
    print(f"Bracket Builder API on http://localhost:{port} (docs at /docs)")
    print("=" * 60)

    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=reload, log_level="info")
