# Per-application wiring of stores and core components
from dataclasses import dataclass

from flask import current_app

from accounts import Accounts
from assets import AssetStore
from engagement import EngagementLedger
from feed import FeedAssembler
from graph import RelationshipGraph
from profiles import ProfileViewComposer
from storage import IdentityStore, PostStore

EXTENSION_KEY = 'social'


@dataclass
class Services:
    accounts: Accounts
    graph: RelationshipGraph
    engagement: EngagementLedger
    feed: FeedAssembler
    profiles: ProfileViewComposer
    assets: AssetStore


def build_services(app):
    identity = IdentityStore()
    posts = PostStore()
    return Services(
        accounts=Accounts(identity),
        graph=RelationshipGraph(identity),
        engagement=EngagementLedger(posts, identity,
                                    retry_limit=app.config['ENGAGEMENT_RETRY_LIMIT']),
        feed=FeedAssembler(posts, identity),
        profiles=ProfileViewComposer(identity),
        assets=AssetStore(app.config['UPLOAD_FOLDER']),
    )


def init_services(app):
    app.extensions[EXTENSION_KEY] = build_services(app)


def get_services():
    return current_app.extensions[EXTENSION_KEY]
