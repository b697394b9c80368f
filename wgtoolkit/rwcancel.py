"""Cancelable blocking reads and writes on a file descriptor."""

import errno
import os
import select

_RETRY_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR})


def retry_after_error(err):
    """Return True if ``err`` means the operation should simply be retried."""
    return isinstance(err, OSError) and err.errno in _RETRY_ERRNOS


def _closed_error():
    return OSError(errno.EBADF, "file already closed")


class RWCancel:
    """Wraps a file descriptor so that blocked reads and writes can be cancelled.

    The descriptor is switched to non-blocking mode; waiting happens in
    ``poll`` alongside an internal pipe that :meth:`cancel` writes to.
    """

    def __init__(self, fd):
        os.set_blocking(fd, False)
        self._fd = fd
        self._closing_reader, self._closing_writer = os.pipe()

    def _wait(self, events):
        if hasattr(select, "poll"):
            poller = select.poll()
            poller.register(self._fd, events)
            poller.register(self._closing_reader, select.POLLIN)
            try:
                ready = dict(poller.poll())
            except OSError:
                return False
            if ready.get(self._closing_reader):
                return False
            return bool(ready.get(self._fd))

        want_write = events == getattr(select, "POLLOUT", 4)
        readers = [self._closing_reader] + ([] if want_write else [self._fd])
        writers = [self._fd] if want_write else []
        try:
            readable, writable, _ = select.select(readers, writers, [])
        except OSError:
            return False
        if self._closing_reader in readable:
            return False
        return self._fd in readable or self._fd in writable

    def ready_read(self):
        """Block until the descriptor is readable; False if cancelled or on error."""
        return self._wait(getattr(select, "POLLIN", 1))

    def ready_write(self):
        """Block until the descriptor is writable; False if cancelled or on error."""
        return self._wait(getattr(select, "POLLOUT", 4))

    def read(self, size):
        """Read up to ``size`` bytes, blocking until data arrives or cancellation."""
        while True:
            try:
                return os.read(self._fd, size)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_read():
                raise _closed_error()

    def write(self, data):
        """Write ``data``, blocking until possible; return the number of bytes written."""
        while True:
            try:
                return os.write(self._fd, data)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_write():
                raise _closed_error()

    def cancel(self):
        """Wake and abort any blocked read or write."""
        os.write(self._closing_writer, b"\0")

    def close(self):
        """Release the internal cancellation pipe."""
        for fd in (self._closing_reader, self._closing_writer):
            try:
                os.close(fd)
            except OSError:
                pass