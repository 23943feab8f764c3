import logging
import threading
from typing import Any, Dict

from sqlalchemy.orm import Session

from . import storage
from .models import Job, TwitterJob

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.7


class TwitterJobProcessor:
    def __init__(self, twitter_service, ai_service):
        self.twitter_service = twitter_service
        self.ai_service = ai_service

    def process_new_tweets(self, db: Session) -> Dict[str, Any]:
        """
        Main function: fetch job tweets, parse them, and save confident ones as jobs
        Returns: summary of what was processed
        """

        # Step 1: Fetch job-related tweets
        try:
            tweets = self.twitter_service.search_job_tweets()
        except Exception as e:
            logger.error("Error searching Twitter for jobs: %s", e)
            tweets = []
        logger.info("Found %d job-related tweets", len(tweets))

        results = {
            'total_tweets': len(tweets),
            'processed': 0,
            'saved': 0,
            'skipped': 0,
            'errors': 0,
            'details': []
        }

        for tweet in tweets:
            try:
                # Step 2: Skip anything we've already stored
                if storage.get_twitter_job_by_tweet_id(db, tweet['id']):
                    results['skipped'] += 1
                    continue

                twitter_job = storage.create_twitter_job(
                    db, tweet_id=tweet['id'], content=tweet['text'], author=tweet.get('author_id') or 'unknown'
                )

                # Step 3: Parse with AI
                parsed = self.ai_service.parse_job_post(tweet['text'])
                results['processed'] += 1

                # Step 4: Only publish confident parses
                if parsed.get('confidence', 0.0) > MIN_CONFIDENCE:
                    job = self._save_job(db, parsed, tweet, twitter_job)
                    results['saved'] += 1
                    results['details'].append({
                        'tweet_id': tweet['id'],
                        'job_id': job.id,
                        'title': job.title,
                        'confidence': parsed.get('confidence'),
                        'status': 'saved'
                    })
                else:
                    results['details'].append({
                        'tweet_id': tweet['id'],
                        'title': parsed.get('title'),
                        'confidence': parsed.get('confidence'),
                        'status': 'low_confidence'
                    })

            except Exception as e:
                db.rollback()
                results['errors'] += 1
                results['details'].append({
                    'tweet_id': tweet.get('id', 'unknown'),
                    'error': str(e),
                    'status': 'error'
                })
                logger.error("Error processing tweet %s: %s", tweet.get('id'), e)

        return results

    def _save_job(self, db: Session, parsed: Dict[str, Any], tweet: Dict[str, Any], twitter_job: TwitterJob) -> Job:
        job = storage.create_job(
            db,
            user_id=None,
            title=parsed['title'],
            company=parsed['company'],
            location=parsed.get('location') or 'Remote',
            description=tweet['text'],
            requirements=parsed.get('requirements') or '',
            type=parsed.get('type') or 'full-time',
            source='twitter',
            source_url=f"https://twitter.com/i/web/status/{tweet['id']}",
        )

        storage.update_twitter_job(
            db,
            twitter_job.id,
            parsed_title=parsed['title'],
            parsed_company=parsed['company'],
            parsed_location=parsed.get('location'),
            processed=True,
            job_id=job.id,
        )

        logger.info("Saved job from tweet %s: %s - %s", tweet['id'], job.company, job.title)
        return job


class IngestionScheduler:
    """Runs the processor on a fixed interval in a daemon thread."""

    def __init__(self, processor: TwitterJobProcessor, session_factory, interval_seconds: float = 3600):
        self.processor = processor
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread = None

    def run_once(self) -> Dict[str, Any]:
        db = self.session_factory()
        try:
            return self.processor.process_new_tweets(db)
        finally:
            db.close()

    def _loop(self):
        # First run happens one interval after startup
        while not self._stop.wait(self.interval_seconds):
            try:
                results = self.run_once()
                logger.info(
                    "Ingestion run: %d tweets, %d saved, %d errors",
                    results['total_tweets'], results['saved'], results['errors'],
                )
            except Exception as e:
                logger.error("Ingestion run failed: %s", e)

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="twitter-ingestion", daemon=True)
        self._thread.start()
        logger.info("Twitter ingestion scheduled every %s seconds", self.interval_seconds)

    def stop(self, timeout: float = 5):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
