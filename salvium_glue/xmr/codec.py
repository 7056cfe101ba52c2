#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# Fixed binary layout of ring signatures, little endian:
#   CLSAG   [n: u32][s_0..s_n-1][c1][I][D]
#   TCLSAG  [n: u32][sx_0..sx_n-1][sy_0..sy_n-1][c1][I][D]

import logging
import struct
from typing import Optional

from salvium_glue.xmr.common import PreconditionError, TruncatedBufferError
from salvium_glue.xmr.serialize_messages.tx_clsag import Clsag, Tclsag

logger = logging.getLogger(__name__)

KEY_SIZE = 32
HEADER_SIZE = 4
TRAILER_SIZE = 3 * KEY_SIZE  # c1, I, D


def clsag_size(n):
    return HEADER_SIZE + KEY_SIZE * n + TRAILER_SIZE


def tclsag_size(n):
    return HEADER_SIZE + 2 * KEY_SIZE * n + TRAILER_SIZE


def _key(x, what):
    if x is None or len(x) != KEY_SIZE:
        raise PreconditionError("Invalid %s, %d bytes expected" % (what, KEY_SIZE))
    return bytes(x)


def _trailer(sig):
    return [_key(sig.c1, "c1"), _key(sig.I, "key image"), _key(sig.D, "D")]


def serialize_clsag(sig: Clsag) -> bytes:
    buff = [struct.pack("<I", len(sig.s))]
    buff.extend(_key(x, "s") for x in sig.s)
    buff.extend(_trailer(sig))
    return b"".join(buff)


def serialize_tclsag(sig: Tclsag) -> bytes:
    if len(sig.sx) != len(sig.sy):
        raise PreconditionError("sx / sy size mismatch")
    buff = [struct.pack("<I", len(sig.sx))]
    buff.extend(_key(x, "sx") for x in sig.sx)
    buff.extend(_key(x, "sy") for x in sig.sy)
    buff.extend(_trailer(sig))
    return b"".join(buff)


def _read_header(buf, size_fnc):
    """
    Returns n after checking the buffer holds exactly size_fnc(n) bytes
    """
    if buf is None or len(buf) < HEADER_SIZE:
        raise TruncatedBufferError("Buffer too short for the header")
    (n,) = struct.unpack_from("<I", buf, 0)
    if len(buf) != size_fnc(n):
        raise TruncatedBufferError(
            "Declared ring size %d needs %d bytes, got %d" % (n, size_fnc(n), len(buf))
        )
    return n


def _keys(buf, offset, n):
    return [bytes(buf[offset + KEY_SIZE * i : offset + KEY_SIZE * (i + 1)]) for i in range(n)]


def load_clsag(buf) -> Clsag:
    buf = bytes(buf) if buf is not None else None
    n = _read_header(buf, clsag_size)
    off = HEADER_SIZE
    s = _keys(buf, off, n)
    off += KEY_SIZE * n
    c1, I, D = _keys(buf, off, 3)
    return Clsag(s=s, c1=c1, I=I, D=D)


def load_tclsag(buf) -> Tclsag:
    buf = bytes(buf) if buf is not None else None
    n = _read_header(buf, tclsag_size)
    off = HEADER_SIZE
    sx = _keys(buf, off, n)
    off += KEY_SIZE * n
    sy = _keys(buf, off, n)
    off += KEY_SIZE * n
    c1, I, D = _keys(buf, off, 3)
    return Tclsag(sx=sx, sy=sy, c1=c1, I=I, D=D)


def deserialize_clsag(buf) -> Optional[Clsag]:
    try:
        return load_clsag(buf)
    except (ValueError, TypeError) as e:
        logger.debug("CLSAG decode failed: %s" % e)
        return None


def deserialize_tclsag(buf) -> Optional[Tclsag]:
    try:
        return load_tclsag(buf)
    except (ValueError, TypeError) as e:
        logger.debug("TCLSAG decode failed: %s" % e)
        return None
