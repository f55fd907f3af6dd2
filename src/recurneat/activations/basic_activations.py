import numpy as np

def identity_activation(z):
    return z

def sigmoid_activation(z):
    z = np.clip(z, -100, 100)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def sigmoid_bipolar_activation(z):
    z = np.clip(z, -100, 100)
    return 2.0 / (1.0 + np.exp(-z)) - 1.0

def tanh_activation(z):
    return np.tanh(z)

def relu_activation(z):
    return np.maximum(0.0, z)

activations = {
    "identity"       : identity_activation,
    "sigmoid"        : sigmoid_activation,
    "sigmoid_bipolar": sigmoid_bipolar_activation,
    "tanh"           : tanh_activation,
    "relu"           : relu_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "identity"       : "IDN",
    "sigmoid"        : "SIG",
    "sigmoid_bipolar": "SGB",
    "tanh"           : "TNH",
    "relu"           : "RLU"
    }
