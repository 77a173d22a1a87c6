"""Request building, signing, sending and decoding."""
from .fields import FieldCollection, FieldValue, stringify, encode
from .signer import Signer, sign
from .request_builder import RequestBuilder, SignedRequest
from .request_handler import RequestHandler, RawResponse
from .response_handler import ResponseHandler, ResponseShape

__all__ = [
    'FieldCollection',
    'FieldValue',
    'stringify',
    'encode',
    'Signer',
    'sign',
    'RequestBuilder',
    'SignedRequest',
    'RequestHandler',
    'RawResponse',
    'ResponseHandler',
    'ResponseShape',
]
