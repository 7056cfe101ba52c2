#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import unittest

from salvium_glue.xmr import clsag, common, crypto
from salvium_glue.xmr.core.ec import prng
from salvium_glue.xmr.serialize_messages.tx_clsag import Clsag
from salvium_glue.xmr.sub import clsag_hasher

from salvium_glue_test.base_ring_test import BaseRingTest, gen_ring, tamper_key


class ClsagTest(BaseRingTest):
    """CLSAG sign / verify"""

    def __init__(self, *args, **kwargs):
        super(ClsagTest, self).__init__(*args, **kwargs)

    def sign(self, rd, message, rng=None):
        return clsag.generate_clsag(
            message,
            rd.ring,
            rd.commitments,
            rd.secret,
            rd.mask,
            rd.pseudo_out,
            rd.index,
            rng,
        )

    def verify(self, rd, message, sig):
        return clsag.verify_clsag(
            message, sig, rd.ring, rd.commitments, rd.pseudo_out
        )

    def test_ring_11(self):
        rd = gen_ring(11, 5)
        message = self.msg(b"test ring 11")
        sig = self.sign(rd, message)

        self.assertEqual(len(sig.s), 11)
        self.assertTrue(self.verify(rd, message, sig))
        self.assertFalse(self.verify(rd, self.msg(b"wrong"), sig))

    def test_all_indices(self):
        for n in range(1, 5):
            for index in range(n):
                rd = gen_ring(n, index)
                message = self.msg(bytes([n, index]))
                sig = self.sign(rd, message)
                self.assertTrue(self.verify(rd, message, sig), "n=%d, i=%d" % (n, index))

    def test_single_member(self):
        rd = gen_ring(1, 0)
        message = self.msg()
        sig = self.sign(rd, message)
        self.assertEqual(len(sig.s), 1)
        self.assertTrue(self.verify(rd, message, sig))

        # c1 is the challenge of the only ring step
        ctx = clsag.ClsagRing(message, rd.ring, rd.commitments, rd.pseudo_out)
        ctx.set_images(sig.I, sig.D)
        c = ctx.accumulate_challenge(0, crypto.decodeint(sig.c1), crypto.decodeint(sig.s[0]))
        self.assertEqual(crypto.encodeint(c), sig.c1)

    def test_key_image(self):
        rd = gen_ring(4, 2)
        sig1 = self.sign(rd, self.msg(b"a"))
        sig2 = self.sign(rd, self.msg(b"b"))
        self.assertEqual(sig1.I, sig2.I)
        self.assertEqual(
            sig1.I, crypto.encodepoint(crypto.generate_key_image(rd.ring[2], rd.secret))
        )

        # commitment image is published divided by 8
        D_full = crypto.scalarmult(crypto.hash_to_point(rd.ring[2]), rd.mask)
        self.assertTrue(
            crypto.point_eq(crypto.point_mul8(crypto.decodepoint(sig1.D)), D_full)
        )

    def test_deterministic(self):
        rd = gen_ring(3, 1)
        message = self.msg()
        sig1 = self.sign(rd, message, prng(b"seed"))
        sig2 = self.sign(rd, message, prng(b"seed"))
        sig3 = self.sign(rd, message, prng(b"other"))

        self.assertEqual(sig1.s, sig2.s)
        self.assertEqual(sig1.c1, sig2.c1)
        self.assertNotEqual(sig1.c1, sig3.c1)
        self.assertEqual(sig1.I, sig3.I)
        self.assertEqual(sig1.D, sig2.D)
        self.assertEqual(sig1.D, sig3.D)
        self.assertTrue(self.verify(rd, message, sig3))

    def test_tamper(self):
        rd = gen_ring(3, 1)
        message = self.msg()
        sig = self.sign(rd, message)
        self.assertTrue(self.verify(rd, message, sig))

        for i in range(3):
            ring = list(rd.ring)
            ring[i] = crypto.public_key(crypto.random_scalar())
            self.assertFalse(
                clsag.verify_clsag(message, sig, ring, rd.commitments, rd.pseudo_out)
            )

            commitments = list(rd.commitments)
            commitments[i] = crypto.gen_commitment(crypto.random_scalar(), 1)
            self.assertFalse(
                clsag.verify_clsag(message, sig, rd.ring, commitments, rd.pseudo_out)
            )

            ss = list(sig.s)
            ss[i] = tamper_key(ss[i])
            bad = Clsag(s=ss, c1=sig.c1, I=sig.I, D=sig.D)
            self.assertFalse(self.verify(rd, message, bad))

        pseudo_out = crypto.gen_commitment(crypto.random_scalar(), 1000)
        self.assertFalse(
            clsag.verify_clsag(message, sig, rd.ring, rd.commitments, pseudo_out)
        )

        for fld in ("c1", "I", "D"):
            fields = dict(s=sig.s, c1=sig.c1, I=sig.I, D=sig.D)
            fields[fld] = tamper_key(fields[fld])
            self.assertFalse(self.verify(rd, message, Clsag(**fields)), fld)

    def test_wrong_secret(self):
        rd = gen_ring(3, 1)
        message = self.msg()
        sig = clsag.generate_clsag(
            message,
            rd.ring,
            rd.commitments,
            crypto.random_scalar(),
            rd.mask,
            rd.pseudo_out,
            rd.index,
        )
        self.assertFalse(self.verify(rd, message, sig))

        sig = clsag.generate_clsag(
            message,
            rd.ring,
            rd.commitments,
            rd.secret,
            crypto.random_scalar(),
            rd.pseudo_out,
            rd.index,
        )
        self.assertFalse(self.verify(rd, message, sig))

    def test_verify_malformed(self):
        rd = gen_ring(3, 0)
        message = self.msg()
        sig = self.sign(rd, message)

        # size mismatches
        self.assertFalse(
            clsag.verify_clsag(message, sig, rd.ring[:2], rd.commitments[:2], rd.pseudo_out)
        )
        self.assertFalse(
            clsag.verify_clsag(message, sig, rd.ring, rd.commitments[:2], rd.pseudo_out)
        )
        self.assertFalse(clsag.verify_clsag(message, sig, [], [], rd.pseudo_out))
        self.assertFalse(self.verify(rd, message[:31], sig))
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s[:2], c1=sig.c1, I=sig.I, D=sig.D)))

        # identity key image
        idd = crypto.encodepoint(crypto.EdPoint())
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s, c1=sig.c1, I=idd, D=sig.D)))

        # non-canonical scalars
        non_reduced = crypto.l.to_bytes(32, "little")
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s, c1=non_reduced, I=sig.I, D=sig.D)))
        ss = [non_reduced] + list(sig.s[1:])
        self.assertFalse(self.verify(rd, message, Clsag(s=ss, c1=sig.c1, I=sig.I, D=sig.D)))

        # undecodable points
        bad_pt = crypto.q.to_bytes(32, "little")
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s, c1=sig.c1, I=bad_pt, D=sig.D)))
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s, c1=sig.c1, I=sig.I, D=bad_pt)))
        self.assertFalse(self.verify(rd, message, Clsag(s=sig.s, c1=sig.c1, I=None, D=sig.D)))
        ring = [bad_pt] + list(rd.ring[1:])
        self.assertFalse(clsag.verify_clsag(message, sig, ring, rd.commitments, rd.pseudo_out))

    def test_sign_preconditions(self):
        rd = gen_ring(3, 1)
        message = self.msg()

        def sign(**kwargs):
            args = dict(
                message=message,
                ring=rd.ring,
                commitments=rd.commitments,
                secret_key=rd.secret,
                mask=rd.mask,
                pseudo_out=rd.pseudo_out,
                index=rd.index,
            )
            args.update(kwargs)
            return clsag.generate_clsag(**args)

        with self.assertRaises(common.PreconditionError):
            sign(index=3)
        with self.assertRaises(common.PreconditionError):
            sign(index=-1)
        with self.assertRaises(common.PreconditionError):
            sign(ring=[], commitments=[], index=0)
        with self.assertRaises(common.PreconditionError):
            sign(commitments=rd.commitments[:2])
        with self.assertRaises(common.PreconditionError):
            sign(message=message + b"\x00")
        with self.assertRaises(common.PreconditionError):
            sign(secret_key=b"\x01" * 16)
        with self.assertRaises(common.InvalidEncodingError):
            sign(ring=[crypto.q.to_bytes(32, "little")] + list(rd.ring[1:]))
        with self.assertRaises(common.InvalidEncodingError):
            sign(pseudo_out=b"\x00" * 31)

    def test_accumulate_challenge(self):
        rd = gen_ring(2, 0)
        message = self.msg()
        sig = self.sign(rd, message)

        ctx = clsag.ClsagRing(message, rd.ring, rd.commitments, rd.pseudo_out)
        ctx.set_images(sig.I, sig.D)
        c = crypto.decodeint(sig.c1)
        s = crypto.decodeint(sig.s[1])

        # explicit L, R for position 1
        c_p = crypto.sc_mul(ctx.mu_P, c)
        c_c = crypto.sc_mul(ctx.mu_C, c)
        Cdiff = crypto.point_sub(
            crypto.decodepoint(rd.commitments[1]), crypto.decodepoint(rd.pseudo_out)
        )
        L = crypto.point_add(
            crypto.multiexp([s, c_p], [crypto.BASE, crypto.decodepoint(rd.ring[1])]),
            crypto.scalarmult(Cdiff, c_c),
        )
        R = crypto.point_add(
            crypto.multiexp([s, c_p], [crypto.hash_to_point(rd.ring[1]), ctx.I]),
            crypto.scalarmult(ctx.D_full, c_c),
        )
        exp = crypto.hash_to_scalar(
            clsag_hasher.HASH_KEY_CLSAG_ROUND
            + b"".join(rd.ring)
            + b"".join(rd.commitments)
            + rd.pseudo_out
            + message
            + crypto.encodepoint(L)
            + crypto.encodepoint(R)
        )
        self.assertTrue(crypto.sc_eq(ctx.accumulate_challenge(1, c, s), exp))

    def test_sign_timing_note(self):
        self.assertIn("Not constant time", clsag.generate_clsag.__doc__)


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
