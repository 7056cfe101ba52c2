#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

from salvium_glue.xmr import crypto
from salvium_glue.xmr.common import HashWrapper


HASH_KEY_CLSAG_ROUND = b"CLSAG_round\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
HASH_KEY_CLSAG_AGG_0 = b"CLSAG_agg_0\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
HASH_KEY_CLSAG_AGG_1 = b"CLSAG_agg_1\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"


def aggregation_hash(domain, ring, commitments, key_image, commitment_image, pseudo_out):
    """
    Single aggregation coefficient
    H_s(domain || P_0..P_n-1 || C_0..C_n-1 || I || D/8 || C_offset)

    :param domain: 32B domain tag
    :param ring: encoded public keys
    :param commitments: encoded commitments, not offset
    :param key_image: encoded I
    :param commitment_image: encoded D/8, as stored in the signature
    :param pseudo_out: encoded pseudo output commitment
    :return: scalar
    """
    hsh = HashWrapper(crypto.get_keccak())
    hsh.update(domain)
    for x in ring:
        hsh.update(x)
    for x in commitments:
        hsh.update(x)
    hsh.update(key_image)
    hsh.update(commitment_image)
    hsh.update(pseudo_out)
    return crypto.decodeint(hsh.digest())


def aggregation_coefficients(ring, commitments, key_image, commitment_image, pseudo_out):
    """
    Returns (mu_P, mu_C)
    """
    mu_P = aggregation_hash(
        HASH_KEY_CLSAG_AGG_0, ring, commitments, key_image, commitment_image, pseudo_out
    )
    mu_C = aggregation_hash(
        HASH_KEY_CLSAG_AGG_1, ring, commitments, key_image, commitment_image, pseudo_out
    )
    return mu_P, mu_C


class ClsagRoundHasher(object):
    """
    Round challenge hasher.
    The ring-wide prefix (domain, P, C, C_offset, message) is fixed,
    each round appends the L, R pair.
    """

    def __init__(self, ring, commitments, pseudo_out, message):
        buff = [HASH_KEY_CLSAG_ROUND]
        buff.extend(bytes(x) for x in ring)
        buff.extend(bytes(x) for x in commitments)
        buff.append(bytes(pseudo_out))
        buff.append(bytes(message))
        self.prefix = b"".join(buff)

    def challenge(self, L, R):
        """
        c = H_s(prefix || L || R), L, R are points
        """
        hsh = crypto.get_keccak()
        hsh.update(self.prefix)
        hsh.update(crypto.encodepoint(L))
        hsh.update(crypto.encodepoint(R))
        return crypto.decodeint(hsh.digest())


def ring_walk(index, n):
    """
    Positions visited by the signer after the real one, wrapping around
    and stopping just before index again.
    """
    return [(index + 1 + k) % n for k in range(n - 1)]


def is_anchor(position):
    """
    c1 is the challenge entering position 0
    """
    return position == 0
