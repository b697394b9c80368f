"""Unix-domain configuration socket: opening, listening and deletion watching."""

import errno
import os
import queue
import socket
import threading

IPC_ERROR_IO = -errno.EIO
IPC_ERROR_PROTOCOL = -errno.EPROTO
IPC_ERROR_INVALID = -errno.EINVAL
IPC_ERROR_PORT_IN_USE = -errno.EADDRINUSE
IPC_ERROR_UNKNOWN = -55  # ENOANO

SOCKET_DIRECTORY = "/var/run/wireguard"

_ACCEPT_POLL_SECONDS = 0.2
_WATCH_INTERVAL_SECONDS = 0.1


def socket_path(iface, directory=SOCKET_DIRECTORY):
    """Return the path of the configuration socket for interface ``iface``."""
    return f"{directory}/{iface}.sock"


def _bind_listening(path):
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(path)
        sock.listen()
    except OSError:
        sock.close()
        raise
    return sock


def _in_use(path):
    probe = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        probe.connect(path)
    except OSError:
        return False
    finally:
        probe.close()
    return True


def uapi_open(name, directory=SOCKET_DIRECTORY):
    """Create and return a listening socket for interface ``name``.

    The socket file is created readable only by its owner. A stale socket
    file left by a dead process is removed; a live one raises OSError with
    ``EADDRINUSE``.
    """
    os.makedirs(directory, mode=0o755, exist_ok=True)
    path = socket_path(name, directory)
    old_umask = os.umask(0o077)
    try:
        try:
            return _bind_listening(path)
        except OSError:
            pass
        if _in_use(path):
            raise OSError(errno.EADDRINUSE, "unix socket in use", path)
        os.remove(path)
        return _bind_listening(path)
    finally:
        os.umask(old_umask)


class UAPIListener:
    """Accepts configuration connections on a listening Unix socket.

    Accepting fails once the socket file is deleted, so a daemon can shut
    down when its control socket is removed. Closing the listener removes
    the socket file.
    """

    def __init__(self, name, sock, directory=SOCKET_DIRECTORY):
        if isinstance(sock, int):
            sock = socket.socket(fileno=sock)
        self._sock = sock
        self._path = socket_path(name, directory)
        self._events = queue.Queue()
        self._stopped = threading.Event()
        self._close_lock = threading.Lock()
        self._error = None
        sock.settimeout(_ACCEPT_POLL_SECONDS)
        threading.Thread(target=self._watch_loop, daemon=True).start()
        threading.Thread(target=self._accept_loop, daemon=True).start()

    def _watch_loop(self):
        while not self._stopped.is_set():
            try:
                os.lstat(self._path)
            except FileNotFoundError as err:
                self._events.put(err)
                return
            except OSError:
                pass
            if self._stopped.wait(_WATCH_INTERVAL_SECONDS):
                return

    def _accept_loop(self):
        while not self._stopped.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError as err:
                if not self._stopped.is_set():
                    self._events.put(err)
                return
            if self._stopped.is_set():
                conn.close()
                return
            self._events.put(conn)

    def accept(self):
        """Block until a client connects and return its socket.

        Raises the error that ended listening, such as FileNotFoundError
        when the socket file was deleted, or OSError after :meth:`close`.
        """
        if self._error is not None:
            raise self._error
        item = self._events.get()
        if isinstance(item, BaseException):
            self._error = item
            raise item
        return item

    def close(self):
        """Stop listening and remove the socket file."""
        with self._close_lock:
            if self._stopped.is_set():
                return
            self._stopped.set()
        self._sock.close()
        try:
            os.unlink(self._path)
        except FileNotFoundError:
            pass
        self._events.put(OSError(errno.EBADF, "use of closed network connection"))

    def address(self):
        """Return the address the listener is bound to."""
        return self._sock.getsockname()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def uapi_listen(name, sock, directory=SOCKET_DIRECTORY):
    """Wrap a listening socket (or its descriptor) in a :class:`UAPIListener`."""
    return UAPIListener(name, sock, directory)