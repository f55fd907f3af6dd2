"""
Activations Package

This package provides the activation functions available to network nodes.

Exported:
    activations:      Dictionary mapping activation function names to functions
    activation_codes: Dictionary mapping activation function names to 3-letter codes
    Individual activation functions: identity_activation, sigmoid_activation,
                                     sigmoid_bipolar_activation, tanh_activation,
                                     relu_activation
"""

from recurneat.activations.basic_activations import (
    activations,
    activation_codes,
    identity_activation,
    sigmoid_activation,
    sigmoid_bipolar_activation,
    tanh_activation,
    relu_activation
)

__all__ = [
    'activations',
    'activation_codes',
    'identity_activation',
    'sigmoid_activation',
    'sigmoid_bipolar_activation',
    'tanh_activation',
    'relu_activation'
]
