import argparse
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv(ROOT / ".env")

from recommendations.app import create_app
from recommendations.config import RecommendationsConfig
from recommendations.logging_config import setup_logging
import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the meal recommendation API.")
    parser.add_argument("--host", default="0.0.0.0", help="Server host")
    parser.add_argument("--port", type=int, default=8002, help="Server port")
    parser.add_argument("--log-file", type=Path, help="Optional log file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    config = RecommendationsConfig.from_env()
    if not config.api_key:
        logging.getLogger("recommendations").warning(
            "NEBIUS_API_KEY is not set; /recommendations will return 500 until it is"
        )

    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
