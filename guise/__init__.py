import logging

from guise.builder import RequestFingerprint, build_request_fingerprint
from guise.headers import flatten, sanitize, sanitize_for_url, to_ordered
from guise.http2 import encode_preface, preface_frames, pseudo_headers
from guise.impersonation import (
    ClientIdentity,
    ClientProfile,
    FingerprintSpec,
    parse_akamai,
    parse_ja3,
    profile_for,
    profile_from_frames,
    resolve_identity,
)
from guise.jitter import random_int
from guise.models import ResponseReplay, UpstreamResponse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "RequestFingerprint",
    "build_request_fingerprint",
    "flatten",
    "sanitize",
    "sanitize_for_url",
    "to_ordered",
    "encode_preface",
    "preface_frames",
    "pseudo_headers",
    "ClientIdentity",
    "ClientProfile",
    "FingerprintSpec",
    "parse_akamai",
    "parse_ja3",
    "profile_for",
    "profile_from_frames",
    "resolve_identity",
    "random_int",
    "ResponseReplay",
    "UpstreamResponse",
]
