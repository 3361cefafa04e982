"""Global pytest configuration."""

import os

# Never reach the real OpenAI API from tests, whatever the shell exports
os.environ["OPENAI_API_KEY"] = ""
