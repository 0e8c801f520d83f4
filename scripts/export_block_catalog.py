"""Write every block descriptor in the catalog to a JSON file.

Usage: python scripts/export_block_catalog.py [output.json]
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from aws_flow_blocks.blocks.registry import get_registry
from aws_flow_blocks.logging_utils import configure_logging


def main() -> None:
    target = sys.argv[1] if len(sys.argv) > 1 else "build/blocks.json"
    configure_logging()
    count = get_registry().export(target)
    print(f"Exported {count} blocks to {target}")


if __name__ == "__main__":
    main()
