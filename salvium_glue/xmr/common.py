#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import hmac


class XmrException(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class PreconditionError(XmrException, ValueError):
    """
    Caller supplied inconsistent input: mismatched lengths, empty ring,
    index out of range, wrong sizes.
    """


class InvalidEncodingError(XmrException, ValueError):
    """
    Point or scalar encoding could not be decoded
    """


class TruncatedBufferError(XmrException, ValueError):
    """
    Declared ring size does not match the buffer length
    """


class HashWrapper(object):
    def __init__(self, ctx):
        self.ctx = ctx

    def update(self, buf):
        if len(buf) == 0:
            return
        if isinstance(buf, bytearray):
            self.ctx.update(bytes(buf))
        else:
            self.ctx.update(buf)

    def digest(self):
        return self.ctx.digest()


def ct_equal(a, b):
    """
    Constant time a,b comparisson
    :param a:
    :param b:
    :return:
    """
    return hmac.compare_digest(a, b)


def check_size(inp, size, what="value"):
    """
    Raises PreconditionError if inp is not exactly size bytes long
    :param inp:
    :param size:
    :param what:
    :return:
    """
    if inp is None or len(inp) != size:
        raise PreconditionError("Invalid %s size, expected %d bytes" % (what, size))
    return inp
