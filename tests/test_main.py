"""Tests for main module."""

from photo_kiosk import main as main_module


def test_main_runs_uvicorn_with_settings(monkeypatch) -> None:
    calls: list[tuple[str, str, int]] = []

    def fake_run(app: str, host: str, port: int) -> None:
        calls.append((app, host, port))

    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "4010")
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls == [("photo_kiosk.api.asgi:app", "127.0.0.1", 4010)]
