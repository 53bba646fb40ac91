import re

# Entrius 2025
# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_TIMEOUT = 30  # seconds
PULLS_PER_PAGE = 100  # only the first page is fetched

# =============================================================================
# Gate Defaults
# =============================================================================
DEFAULT_LOOKBACK_DAYS = 7
MAX_LOOKBACK_DAYS = 3650  # larger windows are capped
DEFAULT_BYPASS_MODE = False

# =============================================================================
# Action Inputs
# =============================================================================
INPUT_GITHUB_TOKEN = "github-token"
INPUT_DAYS = "days"
INPUT_BYPASS_MODE = "bypass-mode"

# =============================================================================
# Emojis
# =============================================================================
POSITIVE_EMOJIS = [
    '😀', '😃', '😄', '😁', '😆', '😊', '🙂', '🙃', '😉', '😌', '😍', '🥰', '😘', '😗', '😙',
    '😚', '😋', '😛', '😝', '😜', '🤪', '🤗', '🤩', '🥳', '👍', '👏', '🙌', '🤝', '🎉', '🎊',
    '🎈', '🎁', '🎯', '🏆', '🥇', '🥂', '✅', '✨', '⭐', '🌟', '💯', '💪', '👌', '🤙', '🔥',
    '❤️', '🧡', '💛', '💚', '💙', '💜', '🖤', '💕', '💞', '💓', '💗', '💖', '💘', '💝',
]

EXAMPLE_POSITIVE_EMOJIS = ['😊', '👍', '🎉', '✨', '❤️']

# Emoji presentation selector, dropped before comparing glyphs
EMOJI_VARIATION_SELECTOR = '\uFE0F'

EMOJI_PATTERN = re.compile(
    '['
    '\U0001F600-\U0001F64F'  # emoticons
    '\U0001F300-\U0001F5FF'  # symbols & pictographs
    '\U0001F680-\U0001F6FF'  # transport & map
    '\U0001F700-\U0001F77F'  # alchemical
    '\U0001F780-\U0001F7FF'  # geometric shapes extended
    '\U0001F800-\U0001F8FF'  # supplemental arrows-c
    '\U0001F900-\U0001F9FF'  # supplemental symbols & pictographs
    '\U0001FA00-\U0001FA6F'  # chess symbols
    '\u2600-\u26FF'  # misc symbols
    '\u2700-\u27BF'  # dingbats
    '\u2B00-\u2BFF'  # misc symbols & arrows (⭐)
    ']'
)
