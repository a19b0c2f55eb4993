from collections.abc import Sequence

from aid_bot.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse


class RecordingLLM(LLMPort):
    def __init__(self) -> None:
        self.messages: list[ChatMessage] = []

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.0, max_tokens: int = 512
    ) -> LLMResponse:
        self.messages.extend(messages)
        return LLMResponse(text="ok")


def test_complete_renders_prompt_as_single_user_message():
    llm = RecordingLLM()

    out = llm.complete("Text: {text}\nAnswer:", {"text": "help {me}"})

    assert out == "ok"
    assert llm.messages == [ChatMessage(role="user", content="Text: help {me}\nAnswer:")]


def test_complete_without_variables_sends_prompt_verbatim():
    llm = RecordingLLM()
    llm.complete("plain prompt")
    assert llm.messages[0].content == "plain prompt"
