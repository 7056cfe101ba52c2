#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# Resources:
# https://cr.yp.to
# https://github.com/monero-project/mininero
# https://godoc.org/github.com/agl/ed25519/edwards25519
# https://tools.ietf.org/html/draft-josefsson-eddsa-ed25519-00#section-4
# https://github.com/monero-project/research-lab

from salvium_glue.xmr import common
from salvium_glue.xmr.core.ec import *


def public_key(sk):
    """
    Creates public key from the private key (integer scalar)
    Returns encoded point
    :param sk:
    :return:
    """
    return encodepoint(scalarmult_base(sk))


def twin_public_key(x, y):
    """
    Twin-generator public key x*G + y*T, encoded
    :param x:
    :param y:
    :return:
    """
    return encodepoint(multiexp([x, y], [BASE, XMR_T_PT]))


def gen_commitment(mask, amount):
    """
    Encoded Pedersen commitment mask*G + amount*H
    :param mask:
    :param amount:
    :return:
    """
    return encodepoint(gen_c(mask, amount))


def generate_key_image(public_key, secret_key):
    """
    Key image sk * H_p(pub)
    :param public_key: encoded point
    :param secret_key:
    :return:
    """
    point = hash_to_point(bytes(public_key))
    return scalarmult(point, secret_key)


def decode_point_checked(buf, what="point"):
    """
    Decodes 32B point, InvalidEncodingError otherwise
    :param buf:
    :param what:
    :return:
    """
    if buf is None or len(buf) != 32:
        raise common.InvalidEncodingError("Invalid %s length" % what)
    try:
        return decodepoint(bytes(buf))
    except ValueError as e:
        raise common.InvalidEncodingError("Invalid %s: %s" % (what, e)) from e


def decode_scalar_checked(buf, what="scalar"):
    """
    Decodes canonical 32B scalar, InvalidEncodingError otherwise
    :param buf:
    :param what:
    :return:
    """
    if buf is None or len(buf) != 32:
        raise common.InvalidEncodingError("Invalid %s length" % what)
    sc = decodeint_noreduce(bytes(buf))
    if sc_check(sc) != 0:
        raise common.InvalidEncodingError("Non-canonical %s" % what)
    return sc


def load_secret(sk, what="secret key"):
    """
    Accepts scalar, integer or 32B encoding of a secret scalar
    :param sk:
    :param what:
    :return:
    """
    if isinstance(sk, EdScalar):
        return sk
    if isinstance(sk, int):
        return EdScalar(sk)
    if isinstance(sk, (bytes, bytearray)) and len(sk) == 32:
        return decodeint(bytes(sk))
    raise common.PreconditionError("Invalid %s" % what)
