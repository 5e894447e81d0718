#!/usr/bin/env python3
"""
Score a PC build stored as JSON component records
"""

import json
import sys
import logging

# Add the current directory to the path so we can import our modules
sys.path.append('.')

from services.benchmark.benchmark_service import BenchmarkService
from services.benchmark.config_manager import BenchmarkConfigManager

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def load_products(path):
    """Read component records from a JSON list or a {"products": [...]} document"""
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        if 'products' in data:
            data = data['products']
        elif 'components' in data:
            components = data['components']
            if not isinstance(components, dict):
                raise ValueError(f"{path}: expected components to be a mapping")
            data = [record for record in components.values() if record]

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of component records")
    return data

def score_file(path, rules_path=None):
    products = load_products(path)
    if not products:
        raise ValueError(f"{path}: no products to score")

    service = BenchmarkService(BenchmarkConfigManager(rules_path))
    return service.score_build(products).to_dict()

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Compute the 0-1000 benchmark score of a PC build")
    parser.add_argument("file", help="JSON file with component records")
    parser.add_argument("--rules", help="YAML file overriding the scoring rules")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")

    args = parser.parse_args()

    try:
        result = score_file(args.file, rules_path=args.rules)
    except (OSError, ValueError) as e:
        logger.error(f"Could not score {args.file}: {str(e)}")
        sys.exit(1)

    print(json.dumps(result, indent=2 if args.pretty else None))
