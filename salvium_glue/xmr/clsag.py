#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# CLSAG, Concise Linkable Spontaneous Anonymous Group signatures
# https://eprint.iacr.org/2019/654.pdf
#
# Corresponds to proveRctCLSAGSimple / verRctCLSAGSimple in rctSigs.cpp

import logging
from typing import List

from salvium_glue.xmr import common, crypto
from salvium_glue.xmr.core.ec import Sc25519
from salvium_glue.xmr.serialize_messages.tx_clsag import Clsag
from salvium_glue.xmr.sub.clsag_hasher import (
    ClsagRoundHasher,
    aggregation_coefficients,
    is_anchor,
    ring_walk,
)

logger = logging.getLogger(__name__)


class ClsagRing(object):
    """
    Public data of one ring, decoded once and shared by signing
    and verification.

    P      decoded ring members
    Cdiff  C[i] - C_offset
    I      key image
    D_full commitment image, 8 * D
    """

    def __init__(self, message, ring, commitments, pseudo_out):
        n = len(ring)
        if n == 0:
            raise common.PreconditionError("Empty ring")
        if len(commitments) != n:
            raise common.PreconditionError("Ring / commitments size mismatch")
        common.check_size(message, 32, "message")

        self.n = n
        self.ring = [bytes(x) for x in ring]
        self.commitments = [bytes(x) for x in commitments]
        self.pseudo_out = bytes(pseudo_out)

        C_offset = crypto.decode_point_checked(self.pseudo_out, "pseudo output")
        self.P = [crypto.decode_point_checked(x, "public key") for x in self.ring]
        self.Cdiff = [
            crypto.point_sub(crypto.decode_point_checked(x, "commitment"), C_offset)
            for x in self.commitments
        ]

        self.hasher = ClsagRoundHasher(
            self.ring, self.commitments, self.pseudo_out, message
        )
        self.I = None
        self.D_full = None
        self.mu_P = None
        self.mu_C = None
        self._hp = [None] * n

    def hash_point(self, i):
        if self._hp[i] is None:
            self._hp[i] = crypto.hash_to_point(self.ring[i])
        return self._hp[i]

    def set_images(self, key_image, commitment_image):
        """
        Loads I and D (divided by 8) encodings, derives mu_P, mu_C
        from exactly these encodings.
        """
        self.I = crypto.decode_point_checked(key_image, "key image")
        D = crypto.decode_point_checked(commitment_image, "commitment image")
        self.D_full = crypto.point_mul8(D)
        self.mu_P, self.mu_C = aggregation_coefficients(
            self.ring,
            self.commitments,
            bytes(key_image),
            bytes(commitment_image),
            self.pseudo_out,
        )

    def g_terms(self, s):
        return [s], [crypto.BASE]

    def h_scalar(self, s):
        return s

    def accumulate_challenge(self, i, c, s):
        """
        One ring step at position i with the incoming challenge c:
        L = s*G + c*mu_P*P[i] + c*mu_C*Cdiff[i]
        R = s*H_p(P[i]) + c*mu_P*I + c*mu_C*D_full
        Returns the next challenge H_s(prefix || L || R).
        """
        c_p = crypto.sc_mul(self.mu_P, c)
        c_c = crypto.sc_mul(self.mu_C, c)

        scalars, points = self.g_terms(s)
        L = crypto.multiexp(scalars + [c_p, c_c], points + [self.P[i], self.Cdiff[i]])
        R = crypto.multiexp(
            [self.h_scalar(s), c_p, c_c], [self.hash_point(i), self.I, self.D_full]
        )
        return self.hasher.challenge(L, R)


def check_index(index, n):
    if not isinstance(index, int) or index < 0 or index >= n:
        raise common.PreconditionError("Index out of range")


def walk_ring(ctx, index, c, draw_response):
    """
    Runs the decoy positions after index.
    c is the challenge entering (index + 1) mod n.

    :return: (responses, challenge entering index, c1 or None)
    """
    s = [None] * ctx.n
    c1 = None
    for i in ring_walk(index, ctx.n):
        if is_anchor(i):
            c1 = c
        s[i] = draw_response()
        c = ctx.accumulate_challenge(i, c, s[i])

    if ctx.n > 1 and is_anchor(index):
        c1 = c
    return s, c, c1


def verify_ring(ctx, key_image, commitment_image, c1_enc, responses):
    """
    Full pass over the ring from position 0 starting with c1.
    Raises ValueError subclasses on malformed input.
    """
    ctx.set_images(key_image, commitment_image)
    if crypto.is_identity(ctx.I):
        raise common.InvalidEncodingError("Key image is identity")

    c1 = crypto.decode_scalar_checked(c1_enc, "c1")
    c = c1
    for i in range(ctx.n):
        c = ctx.accumulate_challenge(i, c, responses[i])

    res = common.ct_equal(crypto.encodeint(c), crypto.encodeint(c1))
    if not res:
        logger.debug("Ring signature challenge mismatch")
    return res


def generate_clsag(
    message: bytes,
    ring: List[bytes],
    commitments: List[bytes],
    secret_key: Sc25519,
    mask: Sc25519,
    pseudo_out: bytes,
    index: int,
    rng=None,
) -> Clsag:
    """
    CLSAG for RctType.Simple

    Not constant time: p, z and the nonce go through the variable-time
    scalarmult / multiexp of the pure-Python backend.

    :param message: the full message to be signed (actually its hash)
    :param ring: encoded public keys P
    :param commitments: encoded input commitments C, not offset
    :param secret_key: private key p, P[index] = p*G
    :param mask: z, C[index] - pseudo_out = z*G
    :param pseudo_out: encoded pseudo output commitment
    :param index: real input position
    :param rng: optional deterministic randomness source
    """
    ctx = ClsagRing(message, ring, commitments, pseudo_out)
    check_index(index, ctx.n)
    p = crypto.load_secret(secret_key)
    z = crypto.load_secret(mask, "mask")

    H = ctx.hash_point(index)
    sI = crypto.scalarmult(H, p)  # I = p*H
    D = crypto.scalarmult(H, z)  # D = z*H
    sD = crypto.point_mulinv8(D)  # sig.D = 1/8*z*H
    sI_enc = crypto.encodepoint(sI)
    sD_enc = crypto.encodepoint(sD)
    ctx.set_images(sI_enc, sD_enc)

    a = crypto.random_scalar(rng)
    c = ctx.hasher.challenge(crypto.scalarmult_base(a), crypto.scalarmult(H, a))

    ss, c, c1 = walk_ring(ctx, index, c, lambda: crypto.random_scalar(rng))

    # Final scalar = a - c * (mu_P * p + mu_c * Z)
    tmp_sc = crypto.sc_muladd(ctx.mu_C, z, crypto.sc_mul(ctx.mu_P, p))
    ss[index] = crypto.sc_mulsub(c, tmp_sc, a)

    if c1 is None:
        c1 = ctx.accumulate_challenge(index, c, ss[index])

    return Clsag(
        s=[crypto.encodeint(x) for x in ss],
        c1=crypto.encodeint(c1),
        I=sI_enc,
        D=sD_enc,
    )


def verify_clsag(
    message: bytes,
    sig: Clsag,
    ring: List[bytes],
    commitments: List[bytes],
    pseudo_out: bytes,
) -> bool:
    """
    Verifies CLSAG, malformed input gives False
    """
    try:
        ctx = ClsagRing(message, ring, commitments, pseudo_out)
        if len(sig.s) != ctx.n:
            raise common.PreconditionError("Signature / ring size mismatch")

        ss = [crypto.decode_scalar_checked(x, "s") for x in sig.s]
        return verify_ring(ctx, sig.I, sig.D, sig.c1, ss)

    except (ValueError, TypeError, AttributeError) as e:
        logger.debug("CLSAG rejected: %s" % e)
        return False