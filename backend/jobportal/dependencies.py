from fastapi import Request

from .ai_service import AIService
from .billing import BillingService
from .gmail_service import GmailService
from .ingestion import TwitterJobProcessor
from .matching import AutoApplier


def get_mailer(request: Request) -> GmailService:
    return request.app.state.mailer


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_billing(request: Request) -> BillingService:
    return request.app.state.billing


def get_twitter_processor(request: Request) -> TwitterJobProcessor:
    return request.app.state.twitter_processor


def get_auto_applier(request: Request) -> AutoApplier:
    return AutoApplier(request.app.state.mailer)
