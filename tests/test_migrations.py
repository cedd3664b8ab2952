from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT = Path(__file__).resolve().parents[1]


def test_upgrade_creates_shop_floor_tables(tmp_path):
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False

    command.upgrade(cfg, "head")

    inspector = inspect(create_engine(url))
    assert {"orders", "work_orders", "downtime_logs"} <= set(inspector.get_table_names())
    columns = {c["name"] for c in inspector.get_columns("work_orders")}
    assert {"status", "progress", "version", "completed_at", "order_id"} <= columns
    assert "active_machine" in {c["name"] for c in inspector.get_columns("downtime_logs")}
    uniques = inspector.get_unique_constraints("downtime_logs")
    assert ["active_machine"] in [u["column_names"] for u in uniques]

    command.downgrade(cfg, "base")
    assert "work_orders" not in inspect(create_engine(url)).get_table_names()
