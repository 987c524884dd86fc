"""
发言解析器单元测试
"""

import pytest

from stockbot.orchestrator.router import UtteranceParser


class TestUtteranceParser:
    """UtteranceParser 测试类"""

    @pytest.fixture
    def parser(self):
        return UtteranceParser()

    @pytest.mark.parametrize("utterance,expected", [
        ("삼성전자", "삼성전자"),
        ("주식: 삼성전자", "삼성전자"),
        ("주식：삼성전자", "삼성전자"),
        ("주식 005930", "005930"),
        ("주식:005930", "005930"),
        ("  삼성전자  ", "삼성전자"),
        ("삼성전자?", "삼성전자"),
        ("삼성전자 주가", "삼성전자"),
        ("삼성전자 주가 알려줘", "삼성전자"),
        ("주식: 카카오 시세 어때?", "카카오"),
        ("AAPL!", "AAPL"),
        ("BRK.B", "BRK.B"),
    ])
    def test_extract_subject(self, parser, utterance, expected):
        assert parser.extract_subject(utterance) == expected

    @pytest.mark.parametrize("utterance", ["", "   ", "주식:", "주식 ", "?", None])
    def test_empty_subject(self, parser, utterance):
        assert parser.extract_subject(utterance) == ""

    def test_bare_suffix_word_is_kept(self, parser):
        assert parser.extract_subject("시세") == "시세"

    def test_custom_suffixes(self):
        parser = UtteranceParser(suffixes=["좀"])
        assert parser.extract_subject("삼성전자 좀") == "삼성전자"
        assert parser.extract_subject("삼성전자?") == "삼성전자?"
