#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# Byte level entry points for ring signatures of RingCT inputs

import logging
from typing import List, Optional, Tuple

from salvium_glue.xmr import clsag, codec, common, crypto, tclsag
from salvium_glue.xmr.serialize_messages.tx_clsag import Clsag, Tclsag

logger = logging.getLogger(__name__)

RCT_TYPE_CLSAG = 5
RCT_TYPE_BULLETPROOF_PLUS = 6
RCT_TYPE_FULL_PROOFS = 7
RCT_TYPE_SALVIUM_ZERO = 8
RCT_TYPE_SALVIUM_ONE = 9

RCT_TYPES_CLSAG = (
    RCT_TYPE_CLSAG,
    RCT_TYPE_BULLETPROOF_PLUS,
    RCT_TYPE_FULL_PROOFS,
    RCT_TYPE_SALVIUM_ZERO,
)


def split_keys(flat, what="keys"):
    """
    Splits concatenated 32B keys
    :param flat:
    :param what:
    :return:
    """
    if flat is None or len(flat) == 0 or len(flat) % 32 != 0:
        raise common.PreconditionError("Invalid %s buffer length" % what)
    return [bytes(flat[i : i + 32]) for i in range(0, len(flat), 32)]


def clsag_sign_bytes(
    message, ring_flat, secret_key, commitments_flat, mask, pseudo_out, index, rng=None
) -> bytes:
    ring = split_keys(ring_flat, "ring")
    commitments = split_keys(commitments_flat, "commitments")
    sig = clsag.generate_clsag(
        message, ring, commitments, secret_key, mask, pseudo_out, index, rng
    )
    return codec.serialize_clsag(sig)


def tclsag_sign_bytes(
    message,
    ring_flat,
    secret_x,
    secret_y,
    commitments_flat,
    mask,
    pseudo_out,
    index,
    rng=None,
) -> bytes:
    ring = split_keys(ring_flat, "ring")
    commitments = split_keys(commitments_flat, "commitments")
    sig = tclsag.generate_tclsag(
        message, ring, commitments, secret_x, secret_y, mask, pseudo_out, index, rng
    )
    return codec.serialize_tclsag(sig)


def clsag_verify_bytes(message, sig_bytes, ring_flat, commitments_flat, pseudo_out) -> bool:
    try:
        sig = codec.load_clsag(sig_bytes)
        ring = split_keys(ring_flat, "ring")
        commitments = split_keys(commitments_flat, "commitments")
    except ValueError as e:
        logger.debug("CLSAG input rejected: %s" % e)
        return False
    return clsag.verify_clsag(message, sig, ring, commitments, pseudo_out)


def tclsag_verify_bytes(message, sig_bytes, ring_flat, commitments_flat, pseudo_out) -> bool:
    try:
        sig = codec.load_tclsag(sig_bytes)
        ring = split_keys(ring_flat, "ring")
        commitments = split_keys(commitments_flat, "commitments")
    except ValueError as e:
        logger.debug("TCLSAG input rejected: %s" % e)
        return False
    return tclsag.verify_tclsag(message, sig, ring, commitments, pseudo_out)


def compute_rct_message(prefix_hash, rct_base, bp_components) -> bytes:
    """
    Pre-MLSAG hash, the message signed by all inputs
    H(prefix_hash || H(rct_base) || H(bp_components))

    :param prefix_hash: transaction prefix hash, 32B
    :param rct_base: serialized rctSigBase
    :param bp_components: concatenated range proof fields
    :return:
    """
    common.check_size(prefix_hash, 32, "prefix hash")
    hsh = common.HashWrapper(crypto.get_keccak())
    hsh.update(bytes(prefix_hash))
    hsh.update(crypto.cn_fast_hash(bytes(rct_base)))
    hsh.update(crypto.cn_fast_hash(bytes(bp_components)))
    return hsh.digest()


def input_sig_size(rct_type, ring_size):
    """
    Per input signature size inside RingCT prunable data, key image excluded
    """
    if rct_type == RCT_TYPE_SALVIUM_ONE:
        return 64 * ring_size + 64
    return 32 * ring_size + 64


def _input_signature(rct_type, data, ring_size, key_image):
    keys = [data[i : i + 32] for i in range(0, len(data), 32)]
    if rct_type == RCT_TYPE_SALVIUM_ONE:
        return Tclsag(
            sx=keys[:ring_size],
            sy=keys[ring_size : 2 * ring_size],
            c1=keys[-2],
            I=key_image,
            D=keys[-1],
        )
    return Clsag(s=keys[:ring_size], c1=keys[-2], I=key_image, D=keys[-1])


def verify_rct_signatures(
    rct_type: int,
    message: bytes,
    ring_size: int,
    key_images: List[bytes],
    pseudo_outs: List[bytes],
    sigs_flat: bytes,
    ring_pubkeys: List[bytes],
    ring_commitments: List[bytes],
) -> Tuple[bool, Optional[int]]:
    """
    Verifies ring signatures of all transaction inputs.
    Ring members of input i are ring_pubkeys[i * ring_size:(i + 1) * ring_size].

    :return: (True, None) if all signatures are valid,
             (False, i) for the first invalid input,
             (False, 0) for malformed input
    """
    input_count = len(key_images)
    if rct_type != RCT_TYPE_SALVIUM_ONE and rct_type not in RCT_TYPES_CLSAG:
        logger.debug("Unsupported RCT type %s" % rct_type)
        return False, 0
    if input_count == 0 or ring_size <= 0:
        return False, 0
    if (
        len(pseudo_outs) != input_count
        or len(ring_pubkeys) != input_count * ring_size
        or len(ring_commitments) != input_count * ring_size
    ):
        logger.debug("Input / ring count mismatch")
        return False, 0

    sig_size = input_sig_size(rct_type, ring_size)
    if sigs_flat is None or len(sigs_flat) != input_count * sig_size:
        logger.debug("Invalid signature data length")
        return False, 0

    sigs_flat = bytes(sigs_flat)
    for i in range(input_count):
        data = sigs_flat[i * sig_size : (i + 1) * sig_size]
        ring = ring_pubkeys[i * ring_size : (i + 1) * ring_size]
        commitments = ring_commitments[i * ring_size : (i + 1) * ring_size]
        sig = _input_signature(rct_type, data, ring_size, key_images[i])

        if rct_type == RCT_TYPE_SALVIUM_ONE:
            valid = tclsag.verify_tclsag(message, sig, ring, commitments, pseudo_outs[i])
        else:
            valid = clsag.verify_clsag(message, sig, ring, commitments, pseudo_outs[i])

        if not valid:
            logger.debug("Input %d ring signature invalid" % i)
            return False, i

    return True, None
