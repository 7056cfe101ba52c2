#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# Twin CLSAG, ring members P = x*G + y*T.
# Key image depends only on x, y is proven by the second response stream.

import logging
from typing import List

from salvium_glue.xmr import common, crypto
from salvium_glue.xmr.clsag import ClsagRing, check_index, verify_ring, walk_ring
from salvium_glue.xmr.core.ec import Sc25519
from salvium_glue.xmr.serialize_messages.tx_clsag import Tclsag

logger = logging.getLogger(__name__)


class TclsagRing(ClsagRing):
    """
    Responses are (sx, sy) pairs, L gains the sy*T term
    """

    def g_terms(self, s):
        sx, sy = s
        return [sx, sy], [crypto.BASE, crypto.XMR_T_PT]

    def h_scalar(self, s):
        return s[0]


def _random_pair(rng):
    sx = crypto.random_scalar(rng)
    sy = crypto.random_scalar(rng)
    return sx, sy


def generate_tclsag(
    message: bytes,
    ring: List[bytes],
    commitments: List[bytes],
    secret_x: Sc25519,
    secret_y: Sc25519,
    mask: Sc25519,
    pseudo_out: bytes,
    index: int,
    rng=None,
) -> Tclsag:
    """
    TCLSAG signature

    Not constant time: x, y, z and the nonces go through the variable-time
    scalarmult / multiexp of the pure-Python backend.

    :param message: message hash, 32B
    :param ring: encoded public keys, P[index] = x*G + y*T
    :param commitments: encoded input commitments, not offset
    :param secret_x: G component of the secret key
    :param secret_y: T component of the secret key
    :param mask: z, C[index] - pseudo_out = z*G
    :param pseudo_out: encoded pseudo output commitment
    :param index: real input position
    :param rng: optional deterministic randomness source
    """
    ctx = TclsagRing(message, ring, commitments, pseudo_out)
    check_index(index, ctx.n)
    x = crypto.load_secret(secret_x, "secret x")
    y = crypto.load_secret(secret_y, "secret y")
    z = crypto.load_secret(mask, "mask")

    H = ctx.hash_point(index)
    sI = crypto.scalarmult(H, x)  # I = x*H, y is not linked
    sD = crypto.point_mulinv8(crypto.scalarmult(H, z))
    sI_enc = crypto.encodepoint(sI)
    sD_enc = crypto.encodepoint(sD)
    ctx.set_images(sI_enc, sD_enc)

    a, b = _random_pair(rng)
    L0 = crypto.multiexp([a, b], [crypto.BASE, crypto.XMR_T_PT])
    c = ctx.hasher.challenge(L0, crypto.scalarmult(H, a))

    ss, c, c1 = walk_ring(ctx, index, c, lambda: _random_pair(rng))

    # sx = a - c * (mu_P * x + mu_C * z)
    # sy = b - c * mu_P * y
    tmp_sc = crypto.sc_muladd(ctx.mu_C, z, crypto.sc_mul(ctx.mu_P, x))
    sx = crypto.sc_mulsub(c, tmp_sc, a)
    sy = crypto.sc_mulsub(c, crypto.sc_mul(ctx.mu_P, y), b)
    ss[index] = (sx, sy)

    if c1 is None:
        c1 = ctx.accumulate_challenge(index, c, ss[index])

    return Tclsag(
        sx=[crypto.encodeint(s[0]) for s in ss],
        sy=[crypto.encodeint(s[1]) for s in ss],
        c1=crypto.encodeint(c1),
        I=sI_enc,
        D=sD_enc,
    )


def verify_tclsag(
    message: bytes,
    sig: Tclsag,
    ring: List[bytes],
    commitments: List[bytes],
    pseudo_out: bytes,
) -> bool:
    """
    Verifies TCLSAG, malformed input gives False
    """
    try:
        ctx = TclsagRing(message, ring, commitments, pseudo_out)
        if len(sig.sx) != ctx.n or len(sig.sy) != ctx.n:
            raise common.PreconditionError("Signature / ring size mismatch")

        ss = [
            (
                crypto.decode_scalar_checked(sx, "sx"),
                crypto.decode_scalar_checked(sy, "sy"),
            )
            for sx, sy in zip(sig.sx, sig.sy)
        ]
        return verify_ring(ctx, sig.I, sig.D, sig.c1, ss)

    except (ValueError, TypeError, AttributeError) as e:
        logger.debug("TCLSAG rejected: %s" % e)
        return False
