#!/usr/bin/env python3
"""Development server runner for Questboard.

Host and port come from QUESTBOARD_HOST / QUESTBOARD_PORT (default 0.0.0.0:9000).
"""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "questboard.server.main:app",
        host=os.environ.get("QUESTBOARD_HOST", "0.0.0.0"),
        port=int(os.environ.get("QUESTBOARD_PORT", "9000")),
        reload=True,  # Auto-reload on code changes
        log_level="info",
    )
