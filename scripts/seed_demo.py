#!/usr/bin/env python3
"""Seed demo orders and work orders.

This script is runnable directly (python scripts/seed_demo.py) and also import-safe.
If you see `ModuleNotFoundError: No module named 'floorsync'`, run from the project root or set PYTHONPATH=. before running.
"""
import sys
from datetime import date
from pathlib import Path

# Ensure project root is on sys.path when running the script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from floorsync.db import SessionLocal, create_schema
from floorsync import crud, schemas
from floorsync.core import work_orders
from floorsync.core.broadcaster import EventBroadcaster


import argparse


def seed(db):
    """写入演示数据；已有订单时跳过，返回是否写入"""
    if crud.list_orders(db):
        return False

    # 服务未运行，推送无人接收
    broadcaster = EventBroadcaster()
    o1 = crud.create_order(db, schemas.OrderCreate(customer="ABC Construction", delivery_date=date(2023, 8, 15), status="production"))
    o2 = crud.create_order(db, schemas.OrderCreate(customer="Skyline Towers", delivery_date=date(2023, 8, 20)))

    cut = work_orders.create_work_order(db, broadcaster, o1.id, "Linear Grill 200x50", 50, "cutting")
    work_orders.transition_work_order(db, broadcaster, cut.id, status="in_progress", progress=60)
    work_orders.transition_work_order(db, broadcaster, cut.id, status="completed")

    coat = work_orders.create_work_order(db, broadcaster, o1.id, "Linear Grill 200x50", 50, "coating")
    work_orders.transition_work_order(db, broadcaster, coat.id, status="in_progress", progress=45)

    work_orders.create_work_order(db, broadcaster, o2.id, "Diffuser Type B", 100, "cutting")
    return True


def main():
    parser = argparse.ArgumentParser(description='Seed demo orders and work orders.')
    parser.add_argument('--no-create-tables', action='store_true', help='Skip creating tables before seeding')
    args = parser.parse_args()

    if not args.no_create_tables:
        create_schema()

    with SessionLocal() as db:
        if seed(db):
            print("Database seeded!")
        else:
            print("Orders already exist; nothing seeded")


if __name__ == '__main__':
    main()
