#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import collections

import aiounittest
from salvium_glue.xmr import crypto


RingData = collections.namedtuple(
    "RingData",
    ["ring", "commitments", "pseudo_out", "index", "secret", "secret_y", "mask"],
)


def gen_ring(n, index, amount=1000, twin=False):
    """
    Random ring with the real input at index.
    C[index] - pseudo_out = mask * G
    """
    ring = []
    commitments = []
    for _ in range(n):
        ring.append(crypto.public_key(crypto.random_scalar()))
        commitments.append(crypto.gen_commitment(crypto.random_scalar(), amount))

    x = crypto.random_scalar()
    y = crypto.random_scalar() if twin else None
    ring[index] = crypto.twin_public_key(x, y) if twin else crypto.public_key(x)

    in_mask = crypto.random_scalar()
    out_mask = crypto.random_scalar()
    commitments[index] = crypto.gen_commitment(in_mask, amount)
    pseudo_out = crypto.gen_commitment(out_mask, amount)
    mask = crypto.sc_sub(in_mask, out_mask)
    return RingData(ring, commitments, pseudo_out, index, x, y, mask)


def tamper_key(key):
    """
    Flips the lowest bit of the first byte
    """
    return bytes([key[0] ^ 1]) + bytes(key[1:])


class BaseRingTest(aiounittest.AsyncTestCase):
    def msg(self, data=b"test ring"):
        return crypto.cn_fast_hash(data)
