"""promptbuf: send editor prompts to Ollama, OpenAI or Anthropic and get plain text back."""

__version__ = "0.3.0"
