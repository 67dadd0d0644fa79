import json
import sys
from dataclasses import asdict

from swift_registry.config import get_store_config
from swift_registry.store import create_store
from swift_registry.utils.logging import configure_logging, get_logger
from .seed import seed_file

logger = get_logger(__name__)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m swift_registry.ingestion.cli <csv path>")
        sys.exit(2)
    # stdout carries the JSON result
    configure_logging(stream=sys.stderr, force=True)
    store = create_store(get_store_config().database_url)
    try:
        result = seed_file(store, args[0])
    except (OSError, UnicodeDecodeError) as e:
        logger.error("seed_file_unreadable", path=args[0], error=str(e))
        sys.exit(1)
    finally:
        store.close()
    print(json.dumps(asdict(result), indent=2))


if __name__ == "__main__":
    main()
