"""
AutoStudio - Trend auto-refresh tests
"""
from autostudio.models.content import Trend
from autostudio.services.errors import AIServiceError
from autostudio.services.scheduler_service import AUTO_REFRESH_JOB_ID, run_trend_refresh

TREND = Trend(topic='Zone 2 cardio', volume='20K+', category='Fitness', rising=True,
              search_intent='Informational', trend_type='Breakout', time_period='7d',
              region='worldwide', competition='Low')


class TestAutoRefreshJob:
    """Job registration"""

    def test_single_job_after_repeated_enable(self, studio):
        studio.scheduler.enable_auto_refresh('fitness')
        status = studio.scheduler.enable_auto_refresh('nutrition', country='US')

        assert status['auto_refresh'] == True
        assert [j['id'] for j in status['jobs']] == [AUTO_REFRESH_JOB_ID]
        job = studio.scheduler.scheduler.get_job(AUTO_REFRESH_JOB_ID)
        assert job.kwargs['niche'] == 'nutrition'
        assert job.kwargs['country'] == 'US'

    def test_disable(self, studio):
        studio.scheduler.enable_auto_refresh('fitness')

        status = studio.scheduler.disable_auto_refresh()

        assert status['auto_refresh'] == False
        assert status['jobs'] == []

    def test_disable_when_off(self, studio):
        assert studio.scheduler.disable_auto_refresh()['auto_refresh'] == False

    def test_status_stopped(self, studio):
        assert studio.scheduler.get_status()['status'] == 'stopped'


class TestTrendRefreshTick:
    """One auto-refresh run"""

    def test_success_updates_snapshot(self, studio):
        studio.ai.fetch_trending_topics.return_value = [TREND]

        result = run_trend_refresh(studio, 'fitness', 'GLOBAL', 'all')

        assert result == [TREND]
        snapshot = studio.latest_trends_snapshot()
        assert snapshot['trends'][0]['topic'] == 'Zone 2 cardio'
        assert snapshot['meta']['niche'] == 'fitness'
        assert studio.activity.entries()[0]['msg'] == 'Success: Found 1 breakout topics.'

    def test_failure_logged_and_snapshot_kept(self, studio):
        studio.set_latest_trends([TREND], niche='fitness')
        studio.ai.fetch_trending_topics.side_effect = AIServiceError('quota')

        assert run_trend_refresh(studio, 'fitness') is None
        assert studio.latest_trends == [TREND]
        entry = studio.activity.entries()[0]
        assert entry['type'] == 'error'
        assert entry['msg'].startswith('Sync Error:')
