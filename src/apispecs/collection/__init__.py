"""
api-specs Collection Module

Request collection and environment model plus file loaders.
"""

from .models import (
    Body,
    Collection,
    CollectionInfo,
    Environment,
    Folder,
    Header,
    Item,
    KeyValue,
    RawUrl,
    Request,
    RequestItem,
    RequestSpec,
    SimpleRequest,
    Url,
    UrlObject,
    Variable,
    parse_item,
    parse_request,
    parse_url,
)
from .loader import CollectionLoader, load_collection, load_environment

__all__ = [
    'Body',
    'Collection',
    'CollectionInfo',
    'Environment',
    'Folder',
    'Header',
    'Item',
    'KeyValue',
    'RawUrl',
    'Request',
    'RequestItem',
    'RequestSpec',
    'SimpleRequest',
    'Url',
    'UrlObject',
    'Variable',
    'parse_item',
    'parse_request',
    'parse_url',
    'CollectionLoader',
    'load_collection',
    'load_environment',
]
