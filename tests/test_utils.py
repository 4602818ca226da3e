import dataclasses

import pytest
import torch

from opresolve import Node, ParamDescriptor, ResolverConfig, get_padding, split


def test_split():
    assert split([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert split([], 3) == []


def test_padding_passthrough():
    node = Node("conv", "Conv2D", ["x"], {"pad": ParamDescriptor.literal("same")})
    assert get_padding(node, {}) == "same"


def test_explicit_padding_from_literal():
    node = Node("conv", "Conv2D", ["x"], {
        "pad": ParamDescriptor.literal("explicit"),
        "explicitPaddings": ParamDescriptor.literal([0, 0, 1, 2, 3, 4, 0, 0], type="number[]"),
    })
    assert get_padding(node, {}) == [[0, 0], [1, 2], [3, 4], [0, 0]]


def test_explicit_padding_from_input():
    node = Node("conv", "Conv2D", ["x", "pads"], {
        "pad": ParamDescriptor.literal("explicit"),
        "explicitPaddings": ParamDescriptor.numbers(1),
    })
    tensor_map = {"pads": [torch.tensor([0, 0, 1, 1, 2, 2, 0, 0])]}
    assert get_padding(node, tensor_map) == [[0, 0], [1, 1], [2, 2], [0, 0]]


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("OPRESOLVE_CONTEXT_SEPARATOR", "#")
    monkeypatch.delenv("OPRESOLVE_STRICT", raising=False)
    config = ResolverConfig.from_env()
    assert config.context_separator == "#"
    assert config.strict is False


def test_explicit_padding_missing_entries_are_none():
    node = Node("conv", "Conv2D", ["x"], {
        "pad": ParamDescriptor.literal("explicit"),
        "explicitPaddings": ParamDescriptor.literal([1, 2, 3], type="number[]"),
    })
    assert get_padding(node, {}) == [[1, 2], [3, None], [None, None], [None, None]]

    node = Node("conv", "Conv2D", ["x"], {"pad": ParamDescriptor.literal("explicit")})
    assert get_padding(node, {}) == [[None, None]] * 4


def test_config_is_immutable():
    config = ResolverConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.strict = True
