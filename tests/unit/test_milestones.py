"""
Unit Tests for Momentum Milestones
"""

from app.services.analysis.milestones import MILESTONES, evaluate_milestones


class TestMilestones:
    """마일스톤 판정"""

    def test_no_cards(self):
        report = evaluate_milestones([])

        assert report.achieved == 0
        assert report.total == len(MILESTONES) == 8

    def test_tiktok_card(self):
        card = {
            "platform": "TikTok",
            "metrics": {"followerCount": 1500, "topPostViews": 12000},
            "hashtags": [{"tag": "#a", "lift": 2.1}, {"tag": "#b", "lift": 0.4}],
        }

        report = evaluate_milestones([card]).to_dict()
        done = {item["id"] for item in report["items"] if item["done"]}

        assert done == {"tiktok-1k", "tiktok-10k-views", "tiktok-2x-hashtag"}
        assert report["achieved"] == 3

    def test_platform_must_match(self):
        card = {"platform": "YouTube", "metrics": {"followerCount": 5000}, "hashtags": []}

        done = [item for item in evaluate_milestones([card]).items if item["done"]]

        assert done == []

    def test_youtube_and_spotify(self):
        cards = [
            {
                "platform": "YouTube",
                "metrics": {"subscriberCount": 120, "topPostViews": 4000},
                "hashtags": [{"tag": "a", "lift": 1}, {"tag": "b", "lift": 1}, {"tag": "c", "lift": 1}],
            },
            {
                "platform": "Spotify",
                "metrics": {"topTrackPopularity": "55"},
                "hashtags": [{"tag": "#artist", "lift": 1.5}],
            },
        ]

        done = {item["id"] for item in evaluate_milestones(cards).items if item["done"]}

        assert done == {"yt-100-subs", "yt-top-tags", "spotify-top-50", "spotify-catalog"}
