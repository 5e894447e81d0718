"""
Test package for the PC build benchmark scorer.
"""

import os
import sys
import logging
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set up test logging
logging.basicConfig(
    level=logging.WARNING,  # Reduce noise in tests
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Test configuration
TEST_RULES_PATH = str(project_root / 'tests' / 'no_such_rules.yml')

def setup_test_environment():
    """Set up test environment variables"""
    os.environ.update({
        'SECRET_KEY': 'test-secret-key',
        'BENCHMARK_RULES_PATH': TEST_RULES_PATH,
        'BENCHMARK_MAX_PRODUCTS': '30'
    })


def cpu_record(**specs):
    return {'category': 'CPU', 'name': 'Test CPU', 'specs': specs}


def high_end_build():
    """Component records shaped like the storefront's product documents"""
    return [
        {
            'category': 'CPU',
            'name': 'AMD Ryzen 7 7800X3D',
            'detailedSpecs': {
                'cpu': {
                    'cores': 8,
                    'threads': 16,
                    'baseClock': '4.2 GHz',
                    'boostClock': '5.0 GHz',
                    'l3Cache_MB': 96,
                    'manufacturingProcess': '5nm',
                    'tdp': '120W'
                }
            }
        },
        {
            'category': 'GPU',
            'name': 'NVIDIA GeForce RTX 4080',
            'specifications': {
                'cudaCores': '9728',
                'baseClock': '2205 MHz',
                'boostClock': '2505 MHz',
                'memorySize': '16GB',
                'memoryBandwidth': '716.8 GB/s',
                'tdp': '320W',
                'rayTracing': 'Yes'
            }
        },
        {
            'category': 'RAM',
            'name': 'Corsair Vengeance 32GB',
            'specifications': {'capacity': '32GB', 'speed': '6000 MT/s', 'casLatency': '30'}
        },
        {
            'category': 'Storage',
            'name': 'Samsung 990 Pro 2TB',
            'specifications': {
                'capacity': '2TB',
                'sequentialRead': '7450 MB/s',
                'sequentialWrite': '6900 MB/s'
            }
        },
        {
            'category': 'Motherboard',
            'name': 'ASUS ROG Strix X670E-E',
            'specifications': {'chipset': 'X670E', 'wifi': True, 'maxMemory': '192GB', 'memorySlots': '4'}
        }
    ]
