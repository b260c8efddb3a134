from pagescribe.text_clean import clean_transcription, strip_code_fences


class TestStripCodeFences:
    def test_strips_markdown_fence(self) -> None:
        assert strip_code_fences("```markdown\nHello page\n```") == "Hello page"

    def test_strips_plain_fence(self) -> None:
        assert strip_code_fences("```\nHello\n```  ") == "Hello"

    def test_leaves_unfenced_text(self) -> None:
        assert strip_code_fences("  Plain text\n\nSecond para  ") == "Plain text\n\nSecond para"

    def test_keeps_inner_fences(self) -> None:
        text = "Intro\n```\ncode\n```\nOutro"
        assert strip_code_fences(text) == text


class TestCleanTranscription:
    def test_empty_input(self) -> None:
        assert clean_transcription(None) == ""
        assert clean_transcription("") == ""

    def test_removes_think_block(self) -> None:
        assert clean_transcription("<think>reasoning</think>\nPage text") == "Page text"

    def test_fence_only_is_empty(self) -> None:
        assert clean_transcription("```markdown\n```") == ""
