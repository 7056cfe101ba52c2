#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018
#
# Pure python ed25519 arithmetic, extended twisted Edwards coordinates.
# Not constant time! Verification / PoC only.
#
# Resources:
# https://tools.ietf.org/html/rfc8032#section-5.1
# https://github.com/monero-project/mininero

b = 256
q = 2 ** 255 - 19
l = 2 ** 252 + 27742317777372353535851937790883648493


def expmod(b, e, m):
    return pow(b, e, m)


def inv(x):
    return pow(x, q - 2, q)


d = -121665 * inv(121666) % q
I = expmod(2, (q - 1) // 4, q)  # sqrt(-1)

# Identity in extended coordinates (X, Y, Z, T), x = X/Z, y = Y/Z, xy = T/Z
ident = (0, 1, 1, 0)


def xrecover(y, sign=0):
    """
    Recovers x coordinate from y and the sign bit.
    Raises ValueError if there is no such point.

    :param y:
    :param sign:
    :return:
    """
    u = (y * y - 1) % q
    v = (d * y * y + 1) % q

    # x = uv^3(uv^7)^((q-5)/8)
    v3 = v * v * v % q
    x = u * v3 * expmod(u * v3 * v3 * v, (q - 5) // 8, q) % q

    vxx = v * x * x % q
    if vxx == u:
        pass
    elif vxx == (-u) % q:
        x = x * I % q
    else:
        raise ValueError("Point is not on the curve")

    if x == 0 and sign:
        raise ValueError("Invalid point encoding, x = 0 with sign bit")
    if (x & 1) != sign:
        x = q - x
    return x


def decodeint(s):
    return int.from_bytes(bytes(s[:32]), "little")


def decodeint_wide(s):
    return int.from_bytes(bytes(s), "little")


def encodeint(y):
    return int(y).to_bytes(32, "little")


def encodepoint(P):
    x, y, z, t = P
    zi = inv(z)
    x = (x * zi) % q
    y = (y * zi) % q
    return (y | ((x & 1) << 255)).to_bytes(32, "little")


def decodepoint(s):
    """
    Decodes 32B point encoding, rejects non-canonical y and points off the curve.

    :param s:
    :return:
    """
    if len(s) < 32:
        raise ValueError("Invalid point encoding length")

    v = decodeint(s)
    sign = v >> 255
    y = v & ((1 << 255) - 1)
    if y >= q:
        raise ValueError("Non-canonical point encoding")

    x = xrecover(y, sign)
    return x, y, 1, x * y % q


def point_equal(P, Q):
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    if (P[0] * Q[2] - Q[0] * P[2]) % q != 0:
        return False
    if (P[1] * Q[2] - Q[1] * P[2]) % q != 0:
        return False
    return True


def edwards_add(P, Q):
    # add-2008-hwcd-3, a = -1
    x1, y1, z1, t1 = P
    x2, y2, z2, t2 = Q

    A = (y1 - x1) * (y2 - x2) % q
    B = (y1 + x1) * (y2 + x2) % q
    C = t1 * 2 * d * t2 % q
    D = z1 * 2 * z2 % q
    E = B - A
    F = D - C
    G = D + C
    H = B + A
    return E * F % q, G * H % q, F * G % q, E * H % q


def edwards_double(P):
    # dbl-2008-hwcd, a = -1
    x1, y1, z1, t1 = P

    A = x1 * x1 % q
    B = y1 * y1 % q
    C = 2 * z1 * z1 % q
    H = A + B
    E = H - (x1 + y1) * (x1 + y1)
    G = A - B
    F = C + G
    return E * F % q, G * H % q, F * G % q, E * H % q


def edwards_neg(P):
    return (-P[0]) % q, P[1], P[2], (-P[3]) % q


def scalarmult(P, e):
    """
    Double and add, variable time.

    :param P:
    :param e: non-negative integer
    :return:
    """
    Q = ident
    for i in reversed(range(e.bit_length())):
        Q = edwards_double(Q)
        if (e >> i) & 1:
            Q = edwards_add(Q, P)
    return Q


def multiexp(pairs):
    """
    Straus / Shamir's trick, sum(e_i * P_i). Variable time.

    :param pairs: iterable of (integer, point) tuples
    :return:
    """
    pairs = [(e, P) for e, P in pairs if e != 0]
    bits = max([e.bit_length() for e, _ in pairs], default=0)

    Q = ident
    for i in reversed(range(bits)):
        Q = edwards_double(Q)
        for e, P in pairs:
            if (e >> i) & 1:
                Q = edwards_add(Q, P)
    return Q


B = decodepoint(bytes.fromhex("58" + "66" * 31))

# B * 2^i table for the fixed base
_B_POW = [B]
for _ in range(1, b):
    _B_POW.append(edwards_double(_B_POW[-1]))


def scalarmult_B(e):
    """
    Fixed base multiplication, uses B * 2^i table.

    :param e: integer in [0, 2^256)
    :return:
    """
    Q = ident
    i = 0
    while e:
        if e & 1:
            Q = edwards_add(Q, _B_POW[i])
        e >>= 1
        i += 1
    return Q
