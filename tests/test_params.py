"""
Tests for frozen dataclass parameter containers.

Tests that each parameter dataclass:
- Can be constructed with valid values
- Is frozen (raises FrozenInstanceError on attribute assignment)
- Supports dataclasses.asdict() for dict conversion
- Supports dict-style access
- Is returned by the distributions' ``classical_params`` property
"""

import dataclasses
import pytest
import numpy as np

from hyperexp import Exponential, Hyperexponential
from hyperexp.params import ExponentialParams, HyperexponentialParams


# ============================================================================
# Exponential parameters
# ============================================================================

class TestExponentialParams:
    def test_construction(self):
        p = ExponentialParams(rate=2.0)
        assert p.rate == 2.0

    def test_frozen(self):
        p = ExponentialParams(rate=2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.rate = 3.0

    def test_asdict(self):
        p = ExponentialParams(rate=2.0)
        d = dataclasses.asdict(p)
        assert d == {"rate": 2.0}

    def test_slots(self):
        p = ExponentialParams(rate=2.0)
        assert not hasattr(p, "__dict__")

    def test_dict_access(self):
        p = ExponentialParams(rate=2.0)
        assert p["rate"] == 2.0
        assert "rate" in p
        assert list(p.keys()) == ["rate"]
        assert dict(p.items()) == {"rate": 2.0}

    def test_missing_key(self):
        p = ExponentialParams(rate=2.0)
        with pytest.raises(KeyError):
            p["shape"]

    def test_from_distribution(self):
        params = Exponential(rate=4.0).classical_params
        assert isinstance(params, ExponentialParams)
        assert params.rate == 4.0


# ============================================================================
# Hyperexponential parameters
# ============================================================================

class TestHyperexponentialParams:
    def test_construction(self):
        p = HyperexponentialParams(
            probabilities=np.array([0.4, 0.6]),
            rates=np.array([1.0, 3.0]),
        )
        np.testing.assert_array_equal(p.probabilities, [0.4, 0.6])
        np.testing.assert_array_equal(p.rates, [1.0, 3.0])

    def test_frozen(self):
        p = HyperexponentialParams(
            probabilities=np.array([0.4, 0.6]),
            rates=np.array([1.0, 3.0]),
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.rates = np.array([2.0, 3.0])

    def test_field_names(self):
        fields = {f.name for f in dataclasses.fields(HyperexponentialParams)}
        assert fields == {"probabilities", "rates"}

    def test_asdict(self):
        p = HyperexponentialParams(
            probabilities=np.array([1.0]),
            rates=np.array([2.0]),
        )
        d = dataclasses.asdict(p)
        assert set(d.keys()) == {"probabilities", "rates"}

    def test_values_order(self):
        probs = np.array([0.4, 0.6])
        rates = np.array([1.0, 3.0])
        p = HyperexponentialParams(probabilities=probs, rates=rates)
        first, second = p.values()
        assert first is probs
        assert second is rates

    def test_from_distribution(self):
        dist = Hyperexponential([1.0, 3.0], [0.5, 2.0])
        params = dist.classical_params
        assert isinstance(params, HyperexponentialParams)
        np.testing.assert_allclose(params.probabilities, [0.25, 0.75])
        np.testing.assert_array_equal(params.rates, [0.5, 2.0])

    def test_round_trip(self):
        dist = Hyperexponential([0.2, 0.3, 0.5], [0.5, 1.0, 1.5])
        rebuilt = Hyperexponential.from_classical_params(**dist.classical_params)
        np.testing.assert_array_equal(rebuilt.probabilities, dist.probabilities)
        np.testing.assert_array_equal(rebuilt.rates, dist.rates)

    def test_params_do_not_alias_distribution(self):
        dist = Hyperexponential([0.5, 0.5], [1.0, 2.0])
        params = dist.classical_params
        params.rates[0] = 100.0
        assert dist.rates[0] == 1.0
