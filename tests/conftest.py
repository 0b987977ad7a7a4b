"""
Pytest configuration file.
"""
import pytest

from discord_droll.config import Settings


@pytest.fixture
def mock_env_variables():
    """Fixture to mock the environment variables the bot reads at startup."""
    env_vars = {
        "DISCORD_BOT_TOKEN": "test-token",
        "OPENAI_API_KEY": "test-api-key",
    }

    return env_vars


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        discord_bot_token="token",
        openai_api_key="key",
        openai_chat_model="gpt-test",
        openai_image_model="image-model",
        openai_image_size="256x256",
    )
