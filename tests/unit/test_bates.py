import logging
import math
from unittest.mock import MagicMock

import pytest

from compiler.bates import BatesOptions, apply_bates, load_stamper, parse_bates_options
from core.errors import DependencyMissingError


def test_parse_bates_options_requires_all_three() -> None:
    assert parse_bates_options("DOE", "1", "6") == BatesOptions(prefix="DOE", start=1, width=6)
    assert parse_bates_options("DOE", 10, 4.0) == BatesOptions(prefix="DOE", start=10, width=4)
    assert parse_bates_options(None, "1", "6") is None
    assert parse_bates_options("  ", "1", "6") is None
    assert parse_bates_options("DOE", None, "6") is None
    assert parse_bates_options("DOE", "1", None) is None


@pytest.mark.parametrize("bad", ["0", "-3", "abc", "1.5", "inf", "nan", math.inf, True, ""])
def test_parse_bates_options_rejects_invalid_numbers(bad) -> None:
    assert parse_bates_options("DOE", bad, "6") is None
    assert parse_bates_options("DOE", "1", bad) is None


def test_apply_bates_without_options_is_noop() -> None:
    stamper = MagicMock()
    assert apply_bates(b"%PDF", None, stamper) == b"%PDF"
    stamper.assert_not_called()


def test_apply_bates_calls_stamper() -> None:
    options = BatesOptions(prefix="DOE", start=1, width=6)
    stamper = MagicMock(return_value=b"%PDF-stamped")
    assert apply_bates(b"%PDF", options, stamper) == b"%PDF-stamped"
    stamper.assert_called_once_with(b"%PDF", options)


def test_apply_bates_warns_without_stamper(caplog) -> None:
    options = BatesOptions(prefix="DOE", start=1, width=6)
    with caplog.at_level(logging.WARNING, logger="compiler.bates"):
        assert apply_bates(b"%PDF", options, None) == b"%PDF"
    assert "no stamper is configured" in caplog.text


def test_load_stamper_resolves_dotted_path() -> None:
    assert load_stamper(None) is None
    assert load_stamper("compiler.bates:apply_bates") is apply_bates
    with pytest.raises(DependencyMissingError, match="compiler.bates"):
        load_stamper("compiler.bates")
    with pytest.raises(DependencyMissingError, match="no_such_module"):
        load_stamper("no_such_module:stamp")
