"""
HashAllocator - Allocates short hex identifiers for derivative filenames.
"""

import hashlib
import secrets
from typing import Optional, Set


class HashAllocator:
    """
    Allocates identifiers that are unique within one album's run.

    Two naming strategies are supported:
        random:  8 random bytes from the OS CSPRNG (16 hex characters).
                 Every run produces new names.
        content: first 16 hex characters of the SHA-256 of the source file,
                 so unchanged sources keep their names across runs.
    """

    STRATEGIES = ('random', 'content')
    NUM_BYTES = 8
    CHUNK_SIZE = 1024 * 1024

    def __init__(self, strategy: str = 'random'):
        """
        Initialize allocator.

        Args:
            strategy: 'random' (default) or 'content'
        """
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown naming strategy: {strategy}")
        self.strategy = strategy

    @property
    def length(self) -> int:
        """Identifier length in hex characters."""
        return self.NUM_BYTES * 2

    def allocate(self, used: Set[str], source_path: Optional[str] = None) -> str:
        """
        Allocate an identifier not present in used, and add it to used.

        Args:
            used: Identifiers already allocated for the current album
            source_path: Source file, required for the content strategy

        Returns:
            The new identifier
        """
        if self.strategy == 'content':
            if source_path is None:
                raise ValueError("content naming requires a source path")
            identifier = self._content_hash(source_path, used)
        else:
            identifier = secrets.token_hex(self.NUM_BYTES)
            while identifier in used:
                identifier = secrets.token_hex(self.NUM_BYTES)

        used.add(identifier)
        return identifier

    def _content_hash(self, source_path: str, used: Set[str]) -> str:
        digest = hashlib.sha256()
        with open(source_path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.CHUNK_SIZE), b''):
                digest.update(chunk)

        identifier = digest.hexdigest()[:self.length]
        counter = 0
        # Identical sources in one album would otherwise share a name
        while identifier in used:
            counter += 1
            salted = hashlib.sha256(f"{digest.hexdigest()}:{counter}".encode())
            identifier = salted.hexdigest()[:self.length]
        return identifier
