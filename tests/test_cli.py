"""Tests for the command line entry point."""
from pathlib import Path

from sqlconst.cli import main

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def test_dry_run_prints_modules(capsys):
    code = main(["shop", "--source-root", str(FIXTURES_DIR), "--dry-run", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert code == 0
    assert "# ---- shop.sql.Order_" in out
    assert "# ---- shop.sql.OrderLine_" in out
    assert "AuditLog_" not in out
    assert '_remarks = "Lines of an order."' in out


def test_writes_into_out_dir(tmp_path):
    code = main(["shop.models", "--source-root", str(FIXTURES_DIR), "--out-dir", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "shop" / "sql" / "Order_.py").exists()


def test_modules_from_config(tmp_path, capsys):
    config = tmp_path / "sqlconst.yaml"
    config.write_text(f"modules: [shop]\nsource_root: {FIXTURES_DIR}\n", encoding="utf-8")

    code = main(["--config", str(config), "--dry-run"])

    assert code == 0
    assert "shop.sql.Order_" in capsys.readouterr().out


def test_no_modules(capsys):
    assert main(["--source-root", str(FIXTURES_DIR)]) == 2
    assert "no modules" in capsys.readouterr().err


def test_missing_source_root(tmp_path, capsys):
    assert main(["shop", "--source-root", str(tmp_path / "nope")]) == 2


def test_import_failure_exit_code():
    assert main(["shop_missing_pkg", "--source-root", str(FIXTURES_DIR), "--dry-run"]) == 1
