"""Smoke test for application startup."""


def test_app_imports() -> None:
    """Verify the app can be imported without errors."""
    from ptcgvault.main import app

    assert app.title == "PTCG Vault"


def test_routes_registered() -> None:
    from ptcgvault.main import app

    paths = {route.path for route in app.routes}

    assert {
        "/api/login",
        "/api/cards",
        "/api/inventory",
        "/api/decks/auto-build",
        "/api/health",
    } <= paths


def test_package_readme_exists() -> None:
    import tomllib
    from pathlib import Path

    root = Path(__file__).resolve().parent.parent
    project = tomllib.loads((root / "pyproject.toml").read_text(encoding="utf-8"))["project"]

    assert (root / project["readme"]).is_file()
    assert project["readme"] == "README.md"
