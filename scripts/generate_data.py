#!/usr/bin/env python3
"""
Generate synthetic food-delivery data as SQL INSERT files.

Target data volumes (defaults):
- 50 restaurants (8 cuisines, weekly operating hours)
- 1,000 customers (new / regular / vip segments)
- 100 drivers
- 5,000 orders (~1/6 delivered, with ratings)
- 20 promotions
- ~1,000 order-promotion links (20% of orders)

Output: results/<table>.sql, applied by the import step in the order
restaurants, customers, drivers, orders, promotions, order_promotions.

Usage:
    python scripts/generate_data.py --seed 42
    python scripts/generate_data.py --help
"""

import sys

from delivery_datagen.cli import main

if __name__ == "__main__":
    sys.exit(main())
