import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)

JOB_QUERY = '(hiring OR "job opening" OR "we\'re looking") -is:retweet lang:en'


class TwitterService:
    """Recent-search client for the Twitter v2 API."""

    def __init__(self, bearer_token: str, timeout: float = 30):
        self.api_url = "https://api.twitter.com/2/tweets/search/recent"
        self.headers = {"Authorization": f"Bearer {bearer_token}"}
        self.timeout = timeout

    def search_job_tweets(
        self, query: str = JOB_QUERY, max_results: int = 50, max_pages: int = 5
    ) -> List[Dict[str, Any]]:
        """Return tweets as {id, text, author_id}. Raises on HTTP failure.

        ``max_results`` is the page size (the API accepts 10-100); pages are
        followed through ``meta.next_token`` until exhausted or ``max_pages``
        have been read.
        """
        params = {
            "query": query,
            "max_results": max(10, min(100, max_results)),
            "tweet.fields": "author_id,created_at",
        }
        tweets = []
        for _ in range(max(1, max_pages)):
            response = requests.get(self.api_url, headers=self.headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()

            for tweet in payload.get("data", []):
                tweets.append({
                    "id": str(tweet["id"]),
                    "text": tweet.get("text", ""),
                    "author_id": str(tweet.get("author_id", "")),
                })

            next_token = payload.get("meta", {}).get("next_token")
            if not next_token:
                break
            params = dict(params, next_token=next_token)
        else:
            logger.info("Stopped tweet search after %s pages", max_pages)
        return tweets
