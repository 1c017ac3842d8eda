import argparse
import logging

import uvicorn
from dotenv import load_dotenv

from core.config import get_api_host, get_api_port, get_log_level


def main():
    """Start the UGC Studio API server."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Serve the UGC Studio API consumed by the Streamlit frontend"
    )
    parser.add_argument("--host", type=str, default=get_api_host())
    parser.add_argument("--port", type=int, default=get_api_port())
    parser.add_argument(
        "--reload", action="store_true", help="Reload on source changes"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "backend.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=get_log_level().lower(),
    )


if __name__ == "__main__":
    main()
