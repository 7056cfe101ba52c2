#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

import os
import unittest
from unittest import mock

import aiounittest
from salvium_glue.xmr.core import ec, ec_picker, ec_py


class EcPickerTest(aiounittest.AsyncTestCase):
    """Backend selection"""

    def __init__(self, *args, **kwargs):
        super(EcPickerTest, self).__init__(*args, **kwargs)

    def test_default(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("EC_BACKEND", None)
            self.assertEqual(ec_picker.get_ec_backend(), ec_picker.EC_BACKEND_PY)

    def test_env(self):
        with mock.patch.dict(os.environ, {"EC_BACKEND": "7"}):
            self.assertEqual(ec_picker.get_ec_backend(), 7)
            with self.assertRaises(ValueError):
                ec_picker.set_ec_backend(ec_picker.EC_BACKEND_PY)

    def test_set(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("EC_BACKEND", None)
            old = ec_picker.EC_BACKEND
            try:
                ec_picker.set_ec_backend(3)
                self.assertEqual(ec_picker.get_ec_backend(), 3)
            finally:
                ec_picker.set_ec_backend(old)

    def test_backend(self):
        self.assertIs(ec.scalarmult, ec_py.scalarmult)
        self.assertIs(ec.hash_to_point, ec_py.hash_to_point)


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
