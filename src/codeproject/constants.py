"""Fixed URLs and relative endpoint paths of the CodeProject API."""

API_BASE_URL = "https://api.codeproject.com"
"""Root of the REST API. Token and resource paths are relative to it."""

SITE_BASE_URL = "https://www.codeproject.com/"
"""Public web site, used only by the forum list scraper."""

TOKEN_PATH = "Token"

# My API
MY_PROFILE = "v1/My/Profile"
MY_REPUTATION = "v1/My/Reputation"
MY_NOTIFICATIONS = "v1/My/Notifications"
MY_ANSWERS = "v1/My/Answers"
MY_ARTICLES = "v1/My/Articles"
MY_BLOG_POSTS = "v1/My/BlogPosts"
MY_BOOKMARKS = "v1/My/Bookmarks"
MY_MESSAGES = "v1/My/Messages"
MY_QUESTIONS = "v1/My/Questions"
MY_TIPS = "v1/My/Tips"

# Articles / Questions / Forums
ARTICLES = "v1/Articles"
QUESTIONS = "v1/Questions"
FORUM = "v1/Forum"
MESSAGE_THREAD = "v1/MessageThread"

FORUM_LIST_PAGE = "script/Forums/List.aspx"
