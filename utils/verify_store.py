"""
Neo4j Store Verification Script
Runs the startup checks (connectivity, version, write permission) against the
configured Neo4j instance without starting the API

Usage:
    python utils/verify_store.py [--config path/to/artgraph.yaml]
"""
import argparse
import sys
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ArtGraph.config import load_store_config
from ArtGraph.storage import neo4j_storage
from ArtGraph.storage.errors import StoreError


def verify_store(config_path: Optional[str] = None) -> bool:
    print("=" * 70)
    print("ArtGraph Neo4j Verification")
    print("=" * 70)

    print("\n[1/2] Loading configuration...")
    try:
        config = load_store_config(config_path)
    except StoreError as e:
        print(f"\n❌ {type(e).__name__}: {e}")
        return False
    for key, value in config.safe_dict().items():
        print(f"  {key}: {value}")

    print("\n[2/2] Running startup checks...")
    try:
        neo4j_storage.initialize(config)
        info = neo4j_storage.get_connection().server_info or {}
    except StoreError as e:
        print(f"\n❌ {type(e).__name__}: {e}")
        return False
    finally:
        neo4j_storage.close()

    print(f"\n✓ Neo4j {info.get('edition', '?')} Edition v{info.get('version', '?')} is ready")
    print("=" * 70)
    return True


def main():
    parser = argparse.ArgumentParser(description="Verify the ArtGraph Neo4j connection")
    parser.add_argument("--config", help="YAML file with a neo4j: section (defaults to ARTGRAPH_CONFIG)")
    args = parser.parse_args()
    sys.exit(0 if verify_store(args.config) else 1)


if __name__ == "__main__":
    main()
