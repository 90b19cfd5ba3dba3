import run


def test_parser_defaults():
    args = run.build_parser().parse_args([])
    assert args.port == 3000
    assert args.host == "127.0.0.1"
    assert args.no_browser is False
    assert args.reload is False


def test_print_qr_code_writes_to_terminal(capsys):
    run.print_qr_code("http://192.168.1.20:3000")
    assert capsys.readouterr().out.strip()


def test_main_starts_app_factory(monkeypatch, capsys):
    started = {}
    opened = []
    monkeypatch.setattr(run.uvicorn, "run", lambda target, **kwargs: started.update(target=target, **kwargs))
    monkeypatch.setattr(run.webbrowser, "open", opened.append)

    run.main(["--port", "4100", "--no-browser"])

    assert started["target"] == "finance_web.main:create_app"
    assert started["factory"] is True
    assert started["port"] == 4100
    assert opened == []
    assert "http://127.0.0.1:4100" in capsys.readouterr().out
