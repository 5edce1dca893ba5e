import sys

import pytest

from stacker_core import export_io, settings
from stacker_core.export import build_csv, build_pallet_csv
from stacker_core.models import Panel


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    monkeypatch.delenv(settings.SETTINGS_ENV, raising=False)
    settings.load_settings.cache_clear()
    yield
    settings.load_settings.cache_clear()


def _panels():
    return [
        Panel(1, "A", length=127, width=24, radius=91, angle_deg=30),
        Panel(2, "B", length=127, width=20, radius=91, angle_deg=45),
    ]


def test_export_dir_from_env(tmp_path, monkeypatch):
    target = tmp_path / "out" / "nested"
    monkeypatch.setenv(export_io.EXPORT_DIR_ENV, str(target))

    assert export_io.ensure_export_dir() == str(target.resolve())
    assert target.is_dir()


def test_default_export_dir_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv(export_io.EXPORT_DIR_ENV, raising=False)
    monkeypatch.setattr(sys, "argv", ["not_a_real_file"])
    monkeypatch.chdir(tmp_path)

    assert export_io.ensure_export_dir() == str(tmp_path.resolve() / "exports")


def test_export_dir_from_settings(tmp_path, monkeypatch):
    monkeypatch.delenv(export_io.EXPORT_DIR_ENV, raising=False)
    settings_file = tmp_path / "settings.yaml"
    settings_file.write_text(f"export_dir: {tmp_path / 'configured'}\n", encoding="utf-8")
    monkeypatch.setenv(settings.SETTINGS_ENV, str(settings_file))
    settings.load_settings.cache_clear()

    assert export_io.get_export_dir() == str((tmp_path / "configured").resolve())


def test_write_stack_csv(tmp_path):
    path = tmp_path / "stack.csv"
    export_io.write_stack_csv(str(path), _panels())

    assert path.read_text(encoding="utf-8") == build_csv(_panels())


def test_write_pallet_csv(tmp_path):
    path = tmp_path / "pallets.csv"
    pallets = [[_panels()[0]], [_panels()[1]]]
    export_io.write_pallet_csv(str(path), pallets)

    assert path.read_text(encoding="utf-8") == build_pallet_csv(pallets)


def test_write_stack_pdf(tmp_path):
    path = tmp_path / "stack.pdf"
    pages = export_io.write_stack_pdf(str(path), _panels(), title="Test report")

    assert pages == 1
    assert path.read_bytes().startswith(b"%PDF")


def test_write_stack_pdf_paginates(tmp_path):
    panels = [Panel(pid, f"P{pid}", length=10, width=1, radius=5, angle_deg=pid) for pid in range(1, 41)]
    pages = export_io.write_stack_pdf(str(tmp_path / "long.pdf"), panels)
    assert pages == 2


@pytest.mark.parametrize(
    "writer",
    [export_io.write_stack_csv, export_io.write_pallet_csv, export_io.write_stack_pdf],
)
def test_writers_reject_empty_input(tmp_path, writer):
    with pytest.raises(ValueError):
        writer(str(tmp_path / "empty"), [])
