#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import binascii

from Crypto.Hash import keccak
from Crypto.Random import random as rand

from salvium_glue.xmr.core.backend import ed25519
from salvium_glue.xmr.core.backend.ed25519 import inv
from salvium_glue.xmr.core.ec_base import *


_decodeint = ed25519.decodeint
_encodeint = ed25519.encodeint
_encodepoint = ed25519.encodepoint
_decodepoint = ed25519.decodepoint


class EdScalar(object):
    def __init__(self, v=None, offset=0):
        self.v = 0
        self.init(v, offset)

    def init(self, src=None, offset=0):
        if src is None:
            self.v = 0
        elif isinstance(src, int):
            self.v = src % l
        elif isinstance(src, EdScalar):
            self.v = src.v
        else:
            self.v = _decodeint(src[offset:]) % l
        return self

    def _assert_scalar(self, other):
        if not isinstance(other, EdScalar):
            raise ValueError("operand is not EdScalar")

    def __repr__(self):
        return "EdScalar(%s)" % binascii.hexlify(_encodeint(self.v))

    def __eq__(self, other):
        self._assert_scalar(other)
        return self.v == other.v

    def __hash__(self):
        return hash(self.v)

    def __bytes__(self):
        return _encodeint(self.v)

    def __neg__(self):
        return EdScalar(-1 * self.v)

    def __add__(self, other):
        self._assert_scalar(other)
        return EdScalar(self.v + other.v)

    def __sub__(self, other):
        self._assert_scalar(other)
        return EdScalar(self.v - other.v)

    def __mul__(self, other):
        self._assert_scalar(other)
        return EdScalar(self.v * other.v)

    @classmethod
    def ensure_scalar(cls, x):
        if isinstance(x, EdScalar):
            return x
        return EdScalar(x)


class EdPoint(object):
    def __init__(self, v=None, offset=0):
        self.v = ed25519.ident
        self.init(v, offset)

    def init(self, src=None, offset=0):
        if src is None:
            self.v = ed25519.ident
        elif isinstance(src, EdPoint):
            self.v = src.v
        elif isinstance(src, tuple):
            self.v = src
        else:
            self.v = _decodepoint(src[offset:])
        return self

    def __repr__(self):
        return "EdPoint(%r)" % binascii.hexlify(_encodepoint(self.v))

    def __getitem__(self, item):
        return self.v[item]

    def __eq__(self, other):
        if isinstance(other, EdPoint):
            return ed25519.point_equal(self.v, other.v)
        elif isinstance(other, tuple):
            return ed25519.point_equal(self.v, other)
        raise ValueError("Neither EdPoint nor quadruple")

    def __hash__(self):
        return hash(_encodepoint(self.v))

    def __bytes__(self):
        return _encodepoint(self.v)

    def _assert_point(self, other):
        if not isinstance(other, EdPoint):
            raise ValueError("operand is not EdPoint")

    def __add__(self, other):
        self._assert_point(other)
        return EdPoint(ed25519.edwards_add(self.v, other.v))

    def __neg__(self):
        return EdPoint(ed25519.edwards_neg(self.v))

    def __sub__(self, other):
        self._assert_point(other)
        return EdPoint(ed25519.edwards_add(self.v, ed25519.edwards_neg(other.v)))

    def __mul__(self, other):
        return EdPoint(ed25519.scalarmult(self.v, other.v))


BASE = EdPoint(ed25519.B)
Sc25519 = EdScalar


def new_scalar():
    return EdScalar()


def get_keccak(*args, **kwargs):
    """
    Simple keccak 256, original one (before changes made in SHA3 standard)
    :return:
    """
    k = keccak.new(digest_bits=256)
    if len(args) == 1:
        k.update(bytes(args[0]))
    return k


def keccak_hash(inp, size=None):
    """
    Hashesh input in one call
    :return:
    """
    inpx = inp if size is None else inp[:size]
    ctx = get_keccak()
    ctx.update(bytes(inpx))
    return ctx.digest()


#
# Basic point enc/dec
#


def _offset(x, offset=0):
    if offset == 0:
        return x
    return x[offset:]


def decodeint(x, offset=0):
    return EdScalar(_offset(x, offset))


def decodeint_noreduce(x, offset=0):
    """
    Loads 32B scalar without reduction, for canonicity checks
    :param x:
    :param offset:
    :return:
    """
    r = new_scalar()
    r.v = _decodeint(_offset(x, offset))
    return r


def encodeint(x):
    return bytes(x)


def encodepoint(P):
    return bytes(P)


def decodepoint(b, offset=0):
    return EdPoint(_offset(b, offset))


def point_eq(P, Q):
    return P == Q


#
# Zmod(2^255 - 19) operations, fe (field element)
# Not constant time! PoC only.
#


def fe_mod(a):
    return a % q


def fe_add(a, b):
    return (a + b) % q


def fe_sub(a, b):
    return (a - b) % q


def fe_sq(a):
    return (a * a) % q


def fe_mul(a, b):
    return (a * b) % q


def fe_neg(a):
    return (-a) % q


def fe_expmod(b, e):
    return ed25519.expmod(b, e, q)


def fe_divpowm1(u, v):
    """
    (u / v)^((q + 3) / 8) = uv^3(uv^7)^((q-5)/8)
    :param u:
    :param v:
    :return:
    """
    v3 = fe_mul(fe_sq(v), v)
    uv7 = fe_mul(fe_mul(u, v3), fe_mul(v3, v))
    return fe_mul(fe_mul(u, v3), fe_expmod(uv7, (q - 5) // 8))


def fe_isnegative(x):
    return (x % q) & 1


def fe_isnonzero(x):
    return x % q != 0


#
# Zmod(order), scalar values field
#


def sc_check(key):
    """
    Returns 0 iff key is a canonical, reduced scalar.
    Works on scalars loaded by decodeint_noreduce.

    :param key:
    :return:
    """
    return 0 if key.v < l else -1


def sc_sub(aa, bb):
    return aa - bb


def sc_eq(a, b):
    return a == b


def sc_mul(a, b):
    return a * b


def sc_mulsub(aa, bb, cc):
    """
    (cc - aa * bb) % l
    """
    return cc - aa * bb


def sc_muladd(aa, bb, cc):
    """
    (cc + aa * bb) % l
    """
    return cc + aa * bb


def random_scalar(rng=None):
    """
    Uniform scalar, reduced from 512 random bits.
    rng is an optional deterministic source with next(num) -> bytes.

    :param rng:
    :return:
    """
    if rng is None:
        return EdScalar(rand.getrandbits(64 * 8) % l)
    return EdScalar(ed25519.decodeint_wide(rng.next(64)) % l)


#
# GE - ed25519 group
#


def scalarmult_base(a):
    return EdPoint(ed25519.scalarmult_B(EdScalar.ensure_scalar(a).v))


def scalarmult(P, e):
    return P * EdScalar.ensure_scalar(e)


def point_add(A, B):
    return A + B


def point_sub(A, B):
    return A - B


def point_double(P):
    return EdPoint(ed25519.edwards_double(P.v))


def point_mul8(P):
    """
    8 * P, three doublings
    :param P:
    :return:
    """
    return point_double(point_double(point_double(P)))


INV_EIGHT = b"\x79\x2f\xdc\xe2\x29\xe5\x06\x61\xd0\xda\x1c\x7d\xb3\x9d\xd3\x07\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x06"
INV_EIGHT_SC = decodeint(INV_EIGHT)


def point_mulinv8(P):
    return P * INV_EIGHT_SC


def multiexp(scalars, points):
    """
    sum(scalars[i] * points[i]), variable time.
    All operands have to be public.

    :param scalars:
    :param points:
    :return:
    """
    if len(scalars) != len(points):
        raise ValueError("Scalars / points size mismatch")
    return EdPoint(
        ed25519.multiexp([(EdScalar.ensure_scalar(sc).v, pt.v) for sc, pt in zip(scalars, points)])
    )


def is_identity(P):
    return P == ed25519.ident


#
# Monero specific
#


def cn_fast_hash(buff):
    """
    Keccak 256, original one (before changes made in SHA3 standard)
    :param buff:
    :return:
    """
    return keccak_hash(buff)


def hash_to_scalar(data, length=None):
    """
    H_s(P)
    :param data:
    :param length:
    :return:
    """
    hash = cn_fast_hash(data[:length] if length else data)
    return decodeint(hash)


def ge_fromfe_frombytes_vartime(s):
    """
    Maps 32B (hash) to the curve, Elligator-like map used by Monero.
    Result is not in the prime order subgroup.

    https://github.com/monero-project/research-lab/blob/master/whitepaper/ge_fromfe_writeup/ge_fromfe.pdf
    :param s:
    :return: point in extended coordinates
    """
    # all 256 bits are loaded, unlike fe_frombytes
    u = ed25519.decodeint(s) % q

    v = fe_mul(2, fe_sq(u))  # 2 * u^2
    w = fe_add(v, 1)  # w = 2 * u^2 + 1
    x = fe_add(fe_sq(w), fe_mul(fe_ma2, v))  # x = w^2 - 2 * A^2 * u^2
    rx = fe_divpowm1(w, x)  # (w / x)^(m + 1)
    x = fe_mul(fe_sq(rx), x)

    z = fe_mod(fe_ma)
    if fe_isnonzero(fe_sub(w, x)):
        if fe_isnonzero(fe_add(w, x)):
            negative = True
        else:
            rx = fe_mul(rx, fe_fffb1)
            negative = False
    else:
        rx = fe_mul(rx, fe_fffb2)
        negative = False

    if not negative:
        rx = fe_mul(rx, u)  # u * sqrt(2 * A * (A + 2) * w / x)
        z = fe_mul(z, v)  # -2 * A * u^2
        sign = 0

    else:
        x = fe_mul(x, fe_sqrtm1)
        if fe_isnonzero(fe_sub(w, x)):
            rx = fe_mul(rx, fe_fffb3)
        else:
            rx = fe_mul(rx, fe_fffb4)
        # rx = sqrt(A * (A + 2) * w / x), z = -A
        sign = 1

    if fe_isnegative(rx) != sign:
        rx = fe_neg(rx)

    rz = fe_add(z, w)
    ry = fe_sub(z, w)
    rx = fe_mul(rx, rz)
    rt = fe_mul(fe_mul(rx, ry), inv(rz))
    return rx, ry, rz, rt


def hash_to_point(buf):
    """
    H_p(buf), cofactor cleared

    :param buf:
    :return:
    """
    P = EdPoint(ge_fromfe_frombytes_vartime(cn_fast_hash(buf)))
    return point_mul8(P)


#
# XMR
#


XMR_H = b"\x8b\x65\x59\x70\x15\x37\x99\xaf\x2a\xea\xdc\x9f\xf1\xad\xd0\xea\x6c\x72\x51\xd5\x41\x54\xcf\xa9\x2c\x17\x3a\x0d\xd3\x9c\x1f\x94"
XMR_H_PT = EdPoint(XMR_H)

# Second generator for twin commitments, T = H_p(keccak("Monero Generator T"))
XMR_T = b"\x96\x6f\xc6\x6b\x82\xcd\x56\xcf\x85\xea\xec\x80\x1c\x42\x84\x5f\x5f\x40\x88\x78\xd1\x56\x1e\x00\xd3\xd7\xde\xd2\x79\x4d\x09\x4f"
XMR_T_PT = EdPoint(XMR_T)


def gen_c(a, amount):
    """
    Generates Pedersen commitment
    C = aG + bH

    :param a:
    :param amount:
    :return:
    """
    return multiexp([a, EdScalar.ensure_scalar(amount)], [BASE, XMR_H_PT])

