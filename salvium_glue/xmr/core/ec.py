#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import logging

from . import ec_picker

logger = logging.getLogger(__name__)
backend = ec_picker.get_ec_backend()


if backend == ec_picker.EC_BACKEND_PY:
    from salvium_glue.xmr.core.ec_py import *

else:
    logger.warning("EC backend %s is not available" % backend)
    raise ValueError("Unknown EC backend: %s" % backend)


from salvium_glue.compat.utils import memcpy


class PRNG:
    """
    Deterministic Keccak stream, keccak(seed || ctr) blocks.
    Used as a replayable randomness source for signing.
    """

    def __init__(self, seed=b""):
        self.seed = bytes(seed)
        self.reset()

    def reset(self, seed=None):
        if seed is not None:
            self.seed = bytes(seed)
        self.state = bytes(self.seed)
        self.ctr = 0
        self.leftover = bytearray(0)
        self.leftover_bytes = 0

    def _gen(self):
        self.ctr += 1
        return keccak_hash(self.state + self.ctr.to_bytes(32, "big"))

    def _nleft(self):
        self.leftover = self._gen()
        self.leftover_bytes = len(self.leftover)

    def next(self, num, buff=None):
        buff = buff if buff is not None else bytearray(num)
        off = 0
        while off < num:
            if self.leftover_bytes == 0:
                self._nleft()

            left = num - off
            tocopy = min(self.leftover_bytes, left)
            start = len(self.leftover) - self.leftover_bytes
            memcpy(buff, off, self.leftover, start, tocopy)
            off += tocopy
            self.leftover_bytes -= tocopy
        return bytes(buff)


def prng(seed=b""):
    return PRNG(seed)
