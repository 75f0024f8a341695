"""
Integration tests against pretrained roberta-base weights

These tests are marked as 'slow' because they download the checkpoint from HuggingFace.

Note: the pretrained_embeddings fixture is defined in conftest.py with scope="session".
"""

import pytest
import torch


@pytest.mark.slow
def test_pretrained_shapes(pretrained_embeddings):
    """Test that roberta-base weights land in the right tables"""
    assert pretrained_embeddings.word_embeddings.weight.shape == (50265, 768)
    assert pretrained_embeddings.position_embeddings.weight.shape == (514, 768)
    assert pretrained_embeddings.token_type_embeddings.weight.shape == (1, 768)
    assert not any(p.is_meta for p in pretrained_embeddings.parameters())


@pytest.mark.slow
def test_pretrained_forward(pretrained_embeddings):
    """Test a padded batch through the pretrained layer"""
    # <s> Hello world </s> <pad> <pad>
    input_ids = torch.tensor([[0, 31414, 232, 2, 1, 1], [0, 31414, 2, 1, 1, 1]])

    with torch.no_grad():
        output = pretrained_embeddings(input_ids=input_ids)
        repeat = pretrained_embeddings(input_ids=input_ids)

    assert output.shape == (2, 6, 768)
    assert torch.isfinite(output).all()
    assert torch.equal(output, repeat)

    # Same prefix and same positions give the same embeddings across rows
    assert torch.allclose(output[0, :2], output[1, :2])
