"""
Loaders for collection and environment documents.
"""

from typing import Optional

from ..common import read_json_document
from .models import Collection, Environment


class CollectionLoader:
    """
    Loads collection and environment JSON files into the model.

    Example:
        collection = CollectionLoader.load_collection("api.postman_collection.json")
        environment = CollectionLoader.load_environment("staging.postman_environment.json")
    """

    @staticmethod
    def load_collection(file_path: str) -> Collection:
        """
        Load a collection file.

        Raises:
            IoError: If the file doesn't exist or can't be read
            ParseError: If the JSON or the collection structure is invalid
        """
        data = read_json_document(file_path, kind="collection")
        return Collection.from_dict(data)

    @staticmethod
    def load_environment(file_path: Optional[str]) -> Optional[Environment]:
        """
        Load an environment file. Returns None when no path is given.

        Raises:
            IoError: If the file doesn't exist or can't be read
            ParseError: If the JSON or the environment structure is invalid
        """
        if not file_path:
            return None
        data = read_json_document(file_path, kind="environment")
        return Environment.from_dict(data)


load_collection = CollectionLoader.load_collection
load_environment = CollectionLoader.load_environment
