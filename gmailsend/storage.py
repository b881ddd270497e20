# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""This module provides the base interface for storage of token records.

A storage holds exactly one :class:`gmailsend.tokens.Token`. Subclasses
implement the ``locked_*`` methods; callers use :meth:`Storage.exists`,
:meth:`Storage.get` and :meth:`Storage.put`.
"""


class Storage:
    """Base class for all Storage objects.

    Store and retrieve a single token. The optional lock serializes access
    between threads of one process only; concurrent processes pointed at the
    same record are not coordinated.
    """

    def __init__(self, lock=None):
        """Create a Storage instance.

        Args:
            lock: An optional threading.Lock-like object. Must implement at
                  least acquire() and release(). Does not need to be
                  re-entrant.
        """
        self._lock = lock

    def acquire_lock(self):
        """Acquires any lock necessary to access this Storage.

        This lock is not reentrant.
        """
        if self._lock is not None:
            self._lock.acquire()

    def release_lock(self):
        """Release the Storage lock.

        Trying to release a lock that isn't held will result in a
        RuntimeError in the case of a threading.Lock or multiprocessing.Lock.
        """
        if self._lock is not None:
            self._lock.release()

    def locked_exists(self):
        """Reports whether a token record is present.

        The Storage lock must be held when this is called.
        """
        raise NotImplementedError

    def locked_get(self):
        """Retrieve the token.

        The Storage lock must be held when this is called.

        Returns:
            gmailsend.tokens.Token
        """
        raise NotImplementedError

    def locked_put(self, token):
        """Write a token.

        The Storage lock must be held when this is called.

        Args:
            token (gmailsend.tokens.Token): The token to store.
        """
        raise NotImplementedError

    def exists(self):
        self.acquire_lock()
        try:
            return self.locked_exists()
        finally:
            self.release_lock()

    def get(self):
        """Retrieve the token.

        The Storage lock must *not* be held when this is called.

        Returns:
            gmailsend.tokens.Token
        """
        self.acquire_lock()
        try:
            return self.locked_get()
        finally:
            self.release_lock()

    def put(self, token):
        """Write a token.

        The Storage lock must *not* be held when this is called.

        Args:
            token (gmailsend.tokens.Token): The token to store.
        """
        self.acquire_lock()
        try:
            self.locked_put(token)
        finally:
            self.release_lock()
