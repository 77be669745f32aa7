import asyncio
import json

import pytest

from factories import listing
from main import parse_args, run


def test_parse_args_clear_flag():
    args = parse_args(["--clear"])
    assert args.clear is True
    assert args.slug is None


def test_parse_args_clear_is_not_a_slug():
    args = parse_args(["clear"])
    assert args.clear is False
    assert args.slug == "clear"


def test_parse_args_rejects_slug_with_clear():
    with pytest.raises(SystemExit):
        parse_args(["hugvisindasvid", "--clear"])


def test_run_clear(service, store):
    store.data["proftafla:hugvisindasvid"] = ("{}", 100)

    assert asyncio.run(run(parse_args(["--clear"]), service)) == 0
    assert store.data == {}


def test_run_unknown_slug(service):
    assert asyncio.run(run(parse_args(["clear"]), service)) == 1


def test_run_prints_division(service, upstream, capsys):
    upstream.pages[3] = listing(("Deild", [("A", "B", "C", "4", "D")]))

    assert asyncio.run(run(parse_args(["hugvisindasvid"]), service)) == 0
    assert json.loads(capsys.readouterr().out)["heading"] == "Hugvísindasvið"
