"""
Mapping between abstract keys and backend object paths.
"""


class PathTranslator:
    """
    Translates keys to object paths under an optional virtual directory.

    The directory never carries a trailing slash, so paths are built as
    'directory/key' and never contain a doubled separator.
    """

    def __init__(self, directory: str = ""):
        self.directory = directory.rstrip("/")

    def compute_path(self, key: str) -> str:
        """
        Compute the backend object path for a key.

        Args:
            key: Abstract key

        Returns:
            Object path ('directory/key', or the key itself without a directory)
        """
        if not self.directory:
            return key

        return f"{self.directory}/{key}"

    def compute_key(self, path: str) -> str:
        """
        Compute the abstract key from a listed object path.

        The directory length is cut off without checking that the path
        actually starts with the directory; paths from a prefix listing
        always do.

        Args:
            path: Object path as returned by the backend

        Returns:
            Abstract key
        """
        return path[len(self.directory):].lstrip("/")
