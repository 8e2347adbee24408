import logging
import sys
from pathlib import Path

import pytest

from errchain import CallSite
from errchain import Err
from errchain import error
from errchain import locate
from errchain import mask
from errchain import new
from errchain import note
from errchain import pass_
from errchain import settings
from errchain import wrap


class NotFoundError(Err):
    pass


def _here():
    return sys._getframe(1).f_lineno


def _locate_for_caller():
    return locate(1)


def _fail():
    return new("deep")


def assert_site(site, line, function):
    assert site.line == line
    assert Path(site.file).name == Path(__file__).name
    assert site.function == f"{__name__}.{function}"


@pytest.mark.unit
class TestCallSite:
    def test_str_uses_site_format(self):
        site = CallSite("pkg.load", "/srv/app/pkg.py", 42)
        assert str(site) == "[pkg.load@/srv/app/pkg.py:42]"

    def test_custom_site_format(self, monkeypatch):
        monkeypatch.setattr(
            settings.render, "site_format", "{file}:{line} in {function}"
        )
        site = CallSite("pkg.load", "pkg.py", 7)
        assert str(site) == "pkg.py:7 in pkg.load"

    def test_empty_site_is_falsy(self):
        assert not CallSite()
        assert CallSite("f", "f.py", 1)

    def test_immutable(self):
        site = CallSite("f", "f.py", 1)
        with pytest.raises(AttributeError):
            site.line = 2


@pytest.mark.unit
class TestLocate:
    def test_default_depth_is_caller_line(self):
        site, line = locate(), _here()
        assert_site(site, line, "TestLocate.test_default_depth_is_caller_line")

    def test_depth_skips_helper_frame(self):
        site, line = _locate_for_caller(), _here()
        assert_site(site, line, "TestLocate.test_depth_skips_helper_frame")

    def test_unqualified_function_name(self, monkeypatch):
        monkeypatch.setattr(settings.render, "qualified", False)
        site = locate()
        assert site.function == "TestLocate.test_unqualified_function_name"

    def test_too_deep_returns_empty_site(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="errchain.core.site"):
            site = locate(100_000)
        assert site == CallSite()
        assert "too shallow" in caplog.text


@pytest.mark.unit
class TestConstructorsRecordCaller:
    def test_new(self):
        err, line = new("boom"), _here()
        assert_site(err.site, line, "TestConstructorsRecordCaller.test_new")

    def test_new_with_arguments(self):
        err, line = new("boom %d", 1), _here()
        assert err.site.line == line

    def test_error_alias(self):
        err, line = error("boom"), _here()
        assert_site(
            err.site, line, "TestConstructorsRecordCaller.test_error_alias"
        )

    def test_wrap(self):
        err, line = wrap(ValueError("x"), "boom"), _here()
        assert_site(err.site, line, "TestConstructorsRecordCaller.test_wrap")

    def test_mask(self):
        err, line = mask(ValueError("x"), "boom"), _here()
        assert_site(err.site, line, "TestConstructorsRecordCaller.test_mask")

    def test_note_on_annotatable_error(self):
        err = new("boom")
        result, line = note(err, "context"), _here()
        assert result is err
        assert_site(
            err.annotations[-1].site,
            line,
            "TestConstructorsRecordCaller.test_note_on_annotatable_error",
        )

    def test_note_on_plain_exception(self):
        err, line = note(KeyError("x"), "context"), _here()
        assert_site(
            err.site,
            line,
            "TestConstructorsRecordCaller.test_note_on_plain_exception",
        )

    def test_pass_when_noted(self):
        err = new("boom")
        result, line = pass_(err, "context", lambda _: True), _here()
        assert result is err
        assert err.annotations[-1].site.line == line

    def test_pass_when_noting_plain_exception(self):
        result, line = pass_(OSError("x"), "context", lambda _: True), _here()
        assert result.site.line == line

    def test_pass_when_masked(self):
        result, line = pass_(new("boom"), "context"), _here()
        assert_site(
            result.site,
            line,
            "TestConstructorsRecordCaller.test_pass_when_masked",
        )

    def test_classmethod_new(self):
        err, line = NotFoundError.new("missing"), _here()
        assert isinstance(err, NotFoundError)
        assert err.site.line == line

    def test_classmethod_wrap(self):
        err, line = NotFoundError.wrap(OSError("x"), "missing"), _here()
        assert isinstance(err, NotFoundError)
        assert err.site.line == line

    def test_nested_function_records_its_own_line(self):
        err = _fail()
        assert_site(err.site, _fail.__code__.co_firstlineno + 1, "_fail")

    def test_site_never_points_into_library(self):
        errors = [
            new("a"),
            wrap(new("a"), "b"),
            mask(new("a"), "b"),
            note(ValueError("a"), "b"),
            pass_(ValueError("a"), "b"),
        ]
        for err in errors:
            assert "errchain" not in Path(err.site.file).parts
