"""Random code generation"""
import pytest

from smartwifi.core.codegen import CODE_ALPHABET, generate


class TestGenerate:
    def test_exact_length(self):
        for length in (1, 4, 10, 20):
            assert len(generate(CODE_ALPHABET, length)) == length

    def test_only_alphabet_characters(self):
        code = generate(CODE_ALPHABET, 2000)
        assert set(code) <= set(CODE_ALPHABET)

    def test_custom_alphabet(self):
        assert generate("X", 6) == "XXXXXX"

    def test_alphabet_has_no_confusable_characters(self):
        for ch in "0O1I":
            assert ch not in CODE_ALPHABET

    def test_draws_cover_the_alphabet(self):
        # 5000 draws from 32 symbols miss one with negligible probability
        assert set(generate(CODE_ALPHABET, 5000)) == set(CODE_ALPHABET)

    def test_successive_codes_differ(self):
        codes = {generate(CODE_ALPHABET, 12) for _ in range(1000)}
        assert len(codes) == 1000

    def test_rejects_empty_alphabet(self):
        with pytest.raises(ValueError):
            generate("", 8)

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            generate(CODE_ALPHABET, 0)
