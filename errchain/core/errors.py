"""\
Error values
============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides the error values built by this library and the
functions used to create and propagate them.

An error starts life with `new` (or `error`) and, as it travels up the
call stack, every layer either adds context with `note` or decides
with `pass_` whether the caller may see what went wrong underneath.
Errors that can take annotations keep their identity when noted, so a
caller's `isinstance` checks still match after any number of layers
have added context. Anything else is wrapped into an `Err` with the
original as its cause.

.. code-block:: python

    class NotFoundError(Err):
        pass

    def is_not_found(error):
        return isinstance(error, NotFoundError)

    def get_config(path):
        try:
            with open(path) as config:
                return config.read()
        except FileNotFoundError as error:
            raise NotFoundError.wrap(error, "couldn't find config file")
        except OSError as error:
            raise wrap(error, "error reading config file")

    def start_foo():
        try:
            get_config("config_file")
        except Exception as error:
            # Only let `NotFoundError` percolate up so that callers do
            # not depend on implementation-specific errors.
            raise pass_(error, "can't start foo", is_not_found)

    def bootstrap():
        try:
            start_foo()
        except Exception as error:
            raise note(error, "can't bootstrap")

    # can't bootstrap: can't start foo: couldn't find config file:
    # [Errno 2] No such file or directory: 'config_file'
"""

from __future__ import annotations

import typing as t

from errchain.core.annotation import Annotation
from errchain.core.capability import is_annotatable
from errchain.core.chain import details as _details
from errchain.core.config import settings
from errchain.core.site import CallSite
from errchain.core.site import locate
from errchain.utils.formatting import format_message

if t.TYPE_CHECKING:
    from collections.abc import Callable

__all__: tuple[str, ...] = (
    "BaseErr",
    "Err",
    "Opaque",
    "error",
    "mask",
    "new",
    "note",
    "pass_",
    "wrap",
)


class BaseErr(Exception):
    """Base class for annotated errors with source-location context.

    Errors of this kind can collect annotations and describe themselves
    in detail, but do not report a cause. See `Err` for errors with a
    structured cause and `Opaque` for masked ones.

    .. note::

        Annotations are appended in place without synchronisation. An
        error must be annotated by one thread at a time.

    :param message: The error's own message.
    :param site: Where the error was created, defaults to `None`.
    """

    def __init__(
        self,
        message: str = "",
        *,
        site: CallSite | None = None,
    ) -> None:
        """Initialise the error with a message and a call-site."""
        super().__init__(message)
        self.message = message
        self.site = site
        self._cause: BaseException | None = None
        self._annotations: list[Annotation] = []

    @property
    def annotations(self) -> tuple[Annotation, ...]:
        """Annotations in the order they were added, oldest first."""
        return tuple(self._annotations)

    def annotate(
        self,
        message: str,
        function: str,
        file: str,
        line: int,
    ) -> None:
        """Add a message to the annotations on the error.

        An empty message is still recorded; it only shows up in the
        detailed rendering of the error.

        :param message: The contextual message, possibly empty.
        :param function: Name of the function adding the annotation.
        :param file: Path of the source file adding the annotation.
        :param line: Line number adding the annotation.
        """
        self._annotations.append(
            Annotation(message, CallSite(function, file, line))
        )

    def __str__(self) -> str:
        """Return the short rendering of the error chain.

        Non-empty annotations come first with the most recent one
        outermost, then the error's own message and finally the short
        rendering of its cause. An empty own message is left out when
        there are other parts, so noting a plain exception with an
        empty message renders just that exception.
        """
        messages = [
            annotation.message
            for annotation in reversed(self._annotations)
            if annotation.message
        ]
        if self.message or not (messages or self._cause is not None):
            messages.append(self.message)
        if self._cause is not None:
            messages.append(str(self._cause))
        return settings.render.separator.join(messages)

    def details(self) -> str:
        """Return the detailed rendering of the error chain.

        Every annotation, most recent first, is followed by the error's
        own message and then the detailed rendering of its cause. Each
        line is prefixed with the call-site it originated from. Without
        a call-site the own message is printed bare, and an empty one
        is left out when there is anything else to show.
        """
        lines = [
            annotation.details() for annotation in reversed(self._annotations)
        ]
        if self.site:
            lines.append(f"{self.site} {self.message}".rstrip())
        elif self.message or not (lines or self._cause is not None):
            lines.append(self.message)
        if self._cause is not None:
            lines.append(_details(self._cause))
        return settings.render.line_separator.join(lines)

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return f"<{type(self).__name__}(message={self.message!r})>"


class Err(BaseErr):
    """Error with an optional structured cause.

    Subclass it to give errors a classification that survives `note`
    and can be let through by `pass_`. The `new` and `wrap`
    classmethods build instances of the class they are called on.

    .. code-block:: python

        class NotFoundError(Err):
            pass

        error = NotFoundError.wrap(original, "couldn't find %s", path)

    Wrapping also sets `__cause__`, so raising the error shows the
    chained traceback of its cause.

    :param message: The error's own message.
    :param cause: The error that led to this one, defaults to `None`.
    :param site: Where the error was created, defaults to `None`.
    """

    def __init__(
        self,
        message: str = "",
        *,
        cause: BaseException | None = None,
        site: CallSite | None = None,
    ) -> None:
        """Initialise the error with a message, cause and call-site."""
        super().__init__(message, site=site)
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    def cause(self) -> BaseException | None:
        """Return the error that caused this error, if any."""
        return self._cause

    @classmethod
    def new(cls, message: str, *args: t.Any, **kwargs: t.Any) -> t.Self:
        """Return a new error of this class with the given message."""
        return _new(cls, 1, message, *args, **kwargs)

    @classmethod
    def wrap(
        cls,
        cause: BaseException | None,
        message: str,
        *args: t.Any,
        **kwargs: t.Any,
    ) -> t.Self | None:
        """Return a new error of this class caused by `cause`."""
        return _wrap(cls, cause, 1, message, *args, **kwargs)

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return (
            f"<{type(self).__name__}(message={self.message!r}, "
            f"cause={self._cause!r})>"
        )


class Opaque(BaseErr):
    """Error that folds in the text of another without exposing it.

    Masked errors keep the human-readable text of the error they hide,
    but offer no way to get back to it. They do not report a cause and
    suppress the exception context when raised.
    """

    def __init__(
        self,
        message: str = "",
        *,
        site: CallSite | None = None,
    ) -> None:
        """Initialise the error with a message and a call-site."""
        super().__init__(message, site=site)
        self.__suppress_context__ = True


E = t.TypeVar("E", bound="Err")


def _new(
    cls: type[E],
    depth: int,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> E:
    """Build an error of `cls` located `depth` frames above the caller."""
    return cls(
        format_message(message, *args, **kwargs),
        site=locate(depth + 1),
    )


def _wrap(
    cls: type[E],
    cause: BaseException | None,
    depth: int,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> E | None:
    """Build an error of `cls` caused by `cause`."""
    if cause is None:
        return None
    return cls(
        format_message(message, *args, **kwargs),
        cause=cause,
        site=locate(depth + 1),
    )


def _mask(
    cause: BaseException | None,
    depth: int,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> Opaque | None:
    """Build a masked error that folds in the text of `cause`."""
    if cause is None:
        return None
    message = format_message(message, *args, **kwargs)
    if message:
        message = f"{message}{settings.render.separator}{cause}"
    else:
        message = str(cause)
    return Opaque(message, site=locate(depth + 1))


def _note(
    err: BaseException | None,
    depth: int,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> BaseException | None:
    """Annotate `err` if it can be annotated, otherwise wrap it."""
    if err is None:
        return None
    if is_annotatable(err):
        site = locate(depth + 1)
        err.annotate(
            format_message(message, *args, **kwargs),
            site.function,
            site.file,
            site.line,
        )
        return err
    return _wrap(Err, err, depth + 1, message, *args, **kwargs)


def new(message: str, *args: t.Any, **kwargs: t.Any) -> Err:
    """Return a new error with the given message.

    :param message: The message, or a printf-style template when
        arguments are given.
    :param args: Positional arguments for the template.
    :param kwargs: Keyword arguments for the template.
    :return: A new error located at the caller, with no cause.
    :raises FormatError: If the template does not accept the arguments.
    """
    return _new(Err, 1, message, *args, **kwargs)


error = new


def wrap(
    cause: BaseException | None,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> Err | None:
    """Return a new error with `cause` as its structured cause.

    The cause is kept as it is and can be retrieved again with
    `errchain.cause`.

    :param cause: The error being wrapped, possibly `None`.
    :param message: The message, or a printf-style template when
        arguments are given.
    :return: A new error located at the caller, or `None` when there
        is no cause to wrap.
    """
    return _wrap(Err, cause, 1, message, *args, **kwargs)


def mask(
    cause: BaseException | None,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> Opaque | None:
    """Return a new error that hides `cause` behind its text.

    The message is followed by the short rendering of the cause, or is
    the short rendering alone when the message is empty. The cause
    itself is not kept, so callers cannot come to depend on it.

    :param cause: The error being masked, possibly `None`.
    :param message: The message, or a printf-style template when
        arguments are given.
    :return: A new opaque error located at the caller, or `None` when
        there is nothing to mask.
    """
    return _mask(cause, 1, message, *args, **kwargs)


def note(
    err: BaseException | None,
    message: str,
    *args: t.Any,
    **kwargs: t.Any,
) -> BaseException | None:
    """Add context to an error, keeping its identity where possible.

    Errors that can be annotated are annotated in place and returned as
    they are. Anything else is wrapped in an `Err` using `message` as
    the new error's message.

    :param err: The error to add context to, possibly `None`.
    :param message: The message, or a printf-style template when
        arguments are given.
    :return: The annotated error, a new wrapping error, or `None`.
    """
    return _note(err, 1, message, *args, **kwargs)


def pass_(
    err: BaseException | None,
    message: str,
    *predicates: Callable[[BaseException], bool],
) -> BaseException | None:
    """Note errors that match a predicate and mask all others.

    Predicates are evaluated in order and evaluation stops at the first
    one that returns `True`. This lets a component whitelist the error
    classifications its callers may see.

    :param err: The error being passed up, possibly `None`.
    :param message: The message to note or mask with, used literally.
    :param predicates: Checks deciding whether `err` may be passed.
    :return: The noted error, a masked error, or `None`.
    """
    if err is None:
        return None
    for should_pass in predicates:
        if should_pass(err):
            return _note(err, 1, message)
    return _mask(err, 1, message)
