"""
Central-moment combinations of raw moments.

Given the raw moments :math:`m_n = E[X^n]`, the central moments are

.. math::
    \\mu_2 = m_2 - m_1^2

    \\mu_3 = m_3 - 3 m_1 m_2 + 2 m_1^3

    \\mu_4 = m_4 - 4 m_1 m_3 + 6 m_1^2 m_2 - 3 m_1^4

from which the variance, skewness :math:`\\mu_3 / \\mu_2^{3/2}` and kurtosis
:math:`\\mu_4 / \\mu_2^2` follow.
"""


def variance_from_raw(m1, m2):
    """Variance from the first two raw moments."""
    return m2 - m1 * m1


def skewness_from_raw(m1, m2, m3):
    """Skewness from the first three raw moments."""
    var = variance_from_raw(m1, m2)
    mu3 = m3 - 3 * m1 * m2 + 2 * m1 ** 3
    return mu3 / (var * var ** 0.5)


def kurtosis_from_raw(m1, m2, m3, m4):
    """
    Kurtosis (not excess) from the first four raw moments.

    The normal distribution has kurtosis 3 under this convention.
    """
    var = variance_from_raw(m1, m2)
    m1_sq = m1 * m1
    mu4 = m4 - 4 * m1 * m3 + 6 * m1_sq * m2 - 3 * m1_sq * m1_sq
    return mu4 / (var * var)
