"""One-shot protocol timers that can be re-armed, cancelled and synchronously stopped."""

import threading


class Timer:
    """A re-armable one-shot timer.

    ``expiration`` is called with no arguments on a background thread when
    the timer fires while still pending. Calling :meth:`mod` again before it
    fires pushes the deadline out; :meth:`delete` cancels it.
    """

    def __init__(self, expiration):
        self._expiration = expiration
        self._modifying = threading.Lock()
        self._running = threading.Lock()
        self._pending = False
        self._generation = 0
        self._thread = None

    def _cancel_thread(self):
        if self._thread is not None:
            self._thread.cancel()
            self._thread = None
        self._generation += 1

    def _fire(self, generation):
        with self._running:
            with self._modifying:
                if not self._pending or generation != self._generation:
                    return
                self._pending = False
                self._thread = None
            self._expiration()

    def mod(self, seconds):
        """Arm the timer to fire ``seconds`` from now, replacing any earlier deadline."""
        with self._modifying:
            self._cancel_thread()
            self._pending = True
            thread = threading.Timer(max(seconds, 0), self._fire, args=(self._generation,))
            thread.daemon = True
            self._thread = thread
            thread.start()

    def delete(self):
        """Cancel the timer if it is pending."""
        with self._modifying:
            self._pending = False
            self._cancel_thread()

    def delete_sync(self):
        """Cancel the timer and wait for a running expiration to finish."""
        self.delete()
        with self._running:
            self.delete()

    def is_pending(self):
        """Return True if the timer is armed and has not fired yet."""
        with self._modifying:
            return self._pending