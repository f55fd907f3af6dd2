"""
Unit tests for the basic activation functions.
"""

import pytest
import numpy as np
from recurneat.activations.basic_activations import (
    identity_activation,
    sigmoid_activation,
    sigmoid_bipolar_activation,
    tanh_activation,
    relu_activation,
    activations,
    activation_codes,
)


@pytest.fixture
def sample_array():
    """Standard 1D array for testing."""
    return np.array([-2.0, -1.0, 0.0, 1.0, 2.0])


class TestActivationsDictionary:
    """Test the lookup tables."""

    def test_all_functions_in_dictionary(self):
        for name in ['identity', 'sigmoid', 'sigmoid_bipolar', 'tanh', 'relu']:
            assert name in activations, f"{name} not found in activations dictionary"

    def test_every_function_has_a_code(self):
        assert set(activation_codes) == set(activations)
        assert all(len(code) == 3 for code in activation_codes.values())

    def test_dictionary_entries_are_callable(self):
        for func in activations.values():
            assert callable(func)


class TestIdentity:

    def test_passes_values_through(self, sample_array):
        np.testing.assert_array_equal(identity_activation(sample_array), sample_array)

    def test_scalar(self):
        assert identity_activation(5.5) == 5.5


class TestSigmoid:

    def test_zero(self):
        assert sigmoid_activation(0.0) == pytest.approx(0.5)

    def test_range(self, sample_array):
        result = sigmoid_activation(sample_array)
        assert np.all(result > 0.0) and np.all(result < 1.0)

    def test_extreme_inputs_do_not_overflow(self):
        """Large inputs are clipped before exponentiation."""
        with np.errstate(over='raise'):
            assert sigmoid_activation(1e6)  == pytest.approx(1.0)
            assert sigmoid_activation(-1e6) == pytest.approx(0.0)


class TestSigmoidBipolar:

    def test_zero(self):
        assert sigmoid_bipolar_activation(0.0) == pytest.approx(0.0)

    def test_odd_symmetry(self, sample_array):
        np.testing.assert_allclose(sigmoid_bipolar_activation(-sample_array),
                                   -sigmoid_bipolar_activation(sample_array))

    def test_range(self):
        assert sigmoid_bipolar_activation(1e6)  == pytest.approx(1.0)
        assert sigmoid_bipolar_activation(-1e6) == pytest.approx(-1.0)


class TestTanh:

    def test_matches_numpy(self, sample_array):
        np.testing.assert_allclose(tanh_activation(sample_array), np.tanh(sample_array))


class TestRelu:

    def test_clips_negatives(self, sample_array):
        np.testing.assert_array_equal(relu_activation(sample_array), [0.0, 0.0, 0.0, 1.0, 2.0])
