"""
AutoStudio - API route tests
"""
import pytest
from unittest.mock import patch

from autostudio.models.content import ArticleDraft, AuditResult, Trend
from autostudio.services.errors import AIAuthError, AIRateLimitError

TREND = Trend(topic='Zone 2 cardio', volume='20K+', category='Fitness', rising=True,
              search_intent='Informational', trend_type='Breakout', time_period='7d',
              region='worldwide', competition='Low')


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def member(client, auth_headers):
    response = client.post('/api/members', json={'name': 'Jane', 'email': 'jane@example.com', 'role': 'Member'},
                           headers=auth_headers)
    return response.get_json()['member']


@pytest.fixture
def member_headers(client, member):
    response = client.post('/api/auth/access', json={'accessKey': member['accessKey']})
    return bearer(response.get_json()['token'])


class TestAccess:
    """Private-mode access keys and the admin gate"""

    def test_admin_key(self, client):
        response = client.post('/api/auth/access', json={'accessKey': 'admin123'})
        data = response.get_json()

        assert response.status_code == 200
        assert data['session']['is_admin'] == True
        assert data['session']['member']['id'] == '1'
        assert 'accessKey' not in data['session']['member']

    def test_bad_key(self, client):
        response = client.post('/api/auth/access', json={'accessKey': 'WRONG'})

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid Access Key or Account Suspended.'

    def test_token_required(self, client):
        assert client.get('/api/auth/me').status_code == 401
        assert client.get('/api/auth/me', headers=bearer('garbage')).get_json()['error'] == 'Invalid token'

    def test_magic_link(self, client, member):
        response = client.get(f"/api/auth/magic?key={member['accessKey']}")

        assert response.status_code == 200
        assert response.get_json()['session']['member']['email'] == 'jane@example.com'

    def test_member_is_not_admin(self, client, member_headers):
        assert client.get('/api/members', headers=member_headers).status_code == 403

    def test_admin_gate_password(self, client, member_headers):
        bad = client.post('/api/auth/admin', json={'password': 'nope'}, headers=member_headers)
        assert bad.status_code == 401

        good = client.post('/api/auth/admin', json={'password': 'admin123'}, headers=member_headers)
        assert good.status_code == 200
        upgraded = bearer(good.get_json()['token'])
        assert client.get('/api/members', headers=upgraded).status_code == 200

    def test_suspended_member_locked_out(self, client, auth_headers, member, member_headers):
        client.post(f"/api/members/{member['id']}/toggle", headers=auth_headers)

        response = client.get('/api/auth/me', headers=member_headers)
        assert response.status_code == 401
        assert response.get_json()['error'] == 'Account suspended'

        denied = client.post('/api/auth/access', json={'accessKey': member['accessKey']})
        assert denied.status_code == 401

    def test_public_mode_grants_anonymous_session(self, client, auth_headers):
        client.put('/api/settings/system', json={'isPrivateMode': False}, headers=auth_headers)

        response = client.post('/api/auth/access', json={})
        data = response.get_json()

        assert response.status_code == 200
        assert data['session']['anonymous'] == True
        me = client.get('/api/auth/me', headers=bearer(data['token']))
        assert me.get_json()['anonymous'] == True

    def test_anonymous_session_revoked_by_private_mode(self, client, state, auth_headers):
        client.put('/api/settings/system', json={'isPrivateMode': False}, headers=auth_headers)
        anonymous = bearer(client.post('/api/auth/access', json={}).get_json()['token'])
        client.put('/api/settings/system', json={'isPrivateMode': True}, headers=auth_headers)

        with patch.object(state.ai, 'find_keywords', return_value=[]) as find:
            response = client.post('/api/research/keywords', json={'seed': 'zone 2'}, headers=anonymous)

        assert response.status_code == 401
        find.assert_not_called()
        assert client.get('/api/settings/wordpress', headers=anonymous).status_code == 401


class TestMemberRoutes:

    def test_list_members(self, client, auth_headers, member):
        data = client.get('/api/members', headers=auth_headers).get_json()

        assert data['total'] == 2

    def test_add_duplicate(self, client, auth_headers, member):
        response = client.post('/api/members', json={'name': 'J', 'email': 'JANE@example.com'},
                               headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()['category'] == 'validation'

    def test_protected_admin(self, client, auth_headers):
        assert client.delete('/api/members/1', headers=auth_headers).status_code == 403
        assert client.post('/api/members/1/toggle', headers=auth_headers).status_code == 403

    def test_toggle_unknown(self, client, auth_headers):
        assert client.post('/api/members/nobody/toggle', headers=auth_headers).status_code == 404

    def test_delete_member(self, client, auth_headers, member):
        assert client.delete(f"/api/members/{member['id']}", headers=auth_headers).status_code == 200
        assert client.get('/api/members', headers=auth_headers).get_json()['total'] == 1

    def test_magic_link_url(self, client, auth_headers, member):
        response = client.get(f"/api/members/{member['id']}/magic-link?base=https://studio.example.com/",
                              headers=auth_headers)

        assert response.get_json()['link'] == f"https://studio.example.com/?key={member['accessKey']}"

    def test_personal_gemini_key(self, client, state, member, member_headers):
        response = client.put('/api/members/me/gemini-key', json={'apiKey': 'AIza-mine'}, headers=member_headers)

        assert response.status_code == 200
        assert state.members.get(member['id']).gemini_api_key == 'AIza-mine'


class TestSettingsRoutes:

    def test_wordpress_password_masked(self, client, auth_headers):
        client.put('/api/settings/wordpress', json={
            'url': 'https://blog.example.com', 'username': 'editor', 'appPassword': 'abcd efgh'
        }, headers=auth_headers)

        data = client.get('/api/settings/wordpress', headers=auth_headers).get_json()
        assert data == {'url': 'https://blog.example.com', 'username': 'editor', 'hasAppPassword': True}

    def test_wordpress_test_unconfigured(self, client, auth_headers):
        assert client.post('/api/settings/wordpress/test', headers=auth_headers).status_code == 400

    def test_system_password_cannot_be_blank(self, client, auth_headers):
        response = client.put('/api/settings/system', json={'adminPasswordHash': ''}, headers=auth_headers)

        assert response.status_code == 400

    def test_system_config_hides_password(self, client, auth_headers):
        data = client.get('/api/settings/system', headers=auth_headers).get_json()

        assert 'adminPasswordHash' not in data
        assert data['isPrivateMode'] == True

    def test_reset(self, client, state, auth_headers, member):
        response = client.post('/api/settings/reset', headers=auth_headers)

        assert response.status_code == 200
        assert [m.id for m in state.members.list()] == ['1']


class TestResearchRoutes:

    def test_trends(self, client, state, auth_headers):
        with patch.object(state.ai, 'fetch_trending_topics', return_value=[TREND]) as fetch:
            response = client.post('/api/research/trends', json={'niche': 'fitness'}, headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['trends'][0]['topic'] == 'Zone 2 cardio'
        assert fetch.call_args.args[:3] == ('fitness', 'GLOBAL', 'all')
        latest = client.get('/api/research/trends/latest', headers=auth_headers).get_json()
        assert latest['meta']['niche'] == 'fitness'

    def test_trends_need_niche(self, client, auth_headers):
        assert client.post('/api/research/trends', json={}, headers=auth_headers).status_code == 400

    def test_rate_limit_error(self, client, state, auth_headers):
        with patch.object(state.ai, 'fetch_trending_topics', side_effect=AIRateLimitError('quota')):
            response = client.post('/api/research/trends', json={'niche': 'fitness'}, headers=auth_headers)

        assert response.status_code == 429
        assert response.get_json()['category'] == 'rate_limit'
        assert state.activity.entries()[0]['msg'].startswith('Sync Error: AI Engine: Rate limit')

    def test_auth_error(self, client, state, auth_headers):
        with patch.object(state.ai, 'find_keywords', side_effect=AIAuthError('bad key')):
            response = client.post('/api/research/keywords', json={'seed': 'zone 2'}, headers=auth_headers)

        assert response.status_code == 401
        assert response.get_json()['category'] == 'auth'

    def test_header_key_forwarded(self, client, state, auth_headers):
        headers = dict(auth_headers, **{'X-Gemini-Key': 'AIza-header'})
        with patch.object(state.ai, 'fetch_smart_suggestions', return_value=[]) as fetch:
            client.post('/api/research/suggestions', json={'category': 'Health'}, headers=headers)

        assert fetch.call_args.kwargs['api_key'] == 'AIza-header'

    def test_auto_refresh_toggle(self, client, auth_headers):
        on = client.post('/api/research/auto-refresh', json={'enabled': True, 'niche': 'fitness'},
                         headers=auth_headers)
        assert on.get_json()['auto_refresh'] == True

        off = client.post('/api/research/auto-refresh', json={'enabled': False}, headers=auth_headers)
        assert off.get_json()['auto_refresh'] == False


class TestArticleRoutes:

    @pytest.fixture
    def generated(self, client, state, auth_headers):
        draft = ArticleDraft(title='Zone 2 Guide', content='Draft', slug='zone-2-guide', keywords=['zone 2'])
        audit = AuditResult(rewritten='Line one\nLine two', similarity=0, human_score=97, seo_score=90)
        with patch.object(state.ai, 'generate_article', return_value=draft), \
                patch.object(state.ai, 'audit_and_rewrite', return_value=audit), \
                patch.object(state.ai, 'generate_blog_image', return_value=None):
            response = client.post('/api/articles/generate', json={'topic': 'Zone 2'}, headers=auth_headers)
        assert response.status_code == 201
        return response.get_json()['article']

    def test_generate(self, generated):
        assert generated['status'] == 'ready'
        assert generated['seoReady'] == True
        assert generated['wordCount'] == 4

    def test_generate_requires_topic(self, client, auth_headers):
        response = client.post('/api/articles/generate', json={'topic': ''}, headers=auth_headers)

        assert response.status_code == 400

    def test_list_and_filter(self, client, auth_headers, generated):
        assert client.get('/api/articles', headers=auth_headers).get_json()['total'] == 1
        assert client.get('/api/articles?status=published', headers=auth_headers).get_json()['total'] == 0

    def test_export_html(self, client, auth_headers, generated):
        response = client.get(f"/api/articles/{generated['id']}/export?format=html", headers=auth_headers)

        assert response.status_code == 200
        assert response.mimetype == 'text/html'
        assert 'zone-2-guide.html' in response.headers['Content-Disposition']
        assert b'Line one<br>Line two' in response.data

    def test_publish_without_wordpress(self, client, auth_headers, generated):
        response = client.post(f"/api/articles/{generated['id']}/publish", headers=auth_headers)

        assert response.status_code == 502
        assert response.get_json()['error'] == 'WP Error: Configuration missing!'

    def test_unknown_article(self, client, auth_headers):
        response = client.get('/api/articles/missing', headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()['error'] == 'Article not found'


class TestProxyRoute:

    def test_generate_text(self, client, state):
        with patch.object(state.ai, 'generate_text', return_value='A tagline'):
            response = client.post('/api/generate', json={'prompt': 'Bakery tagline'})

        assert response.get_json() == {'text': 'A tagline'}

    def test_only_post(self, client):
        response = client.get('/api/generate')

        assert response.status_code == 405
        assert response.get_json() == {'error': 'Method not allowed'}

    def test_upstream_failure(self, client, state):
        with patch.object(state.ai, 'generate_text', side_effect=AIRateLimitError('quota')):
            response = client.post('/api/generate', json={'prompt': 'x'})

        assert response.status_code == 500
        assert response.get_json() == {'error': 'Server error'}


class TestMonitoring:

    def test_health(self, client):
        data = client.get('/health').get_json()

        assert data['status'] == 'healthy'
        assert data['storage'] == 'database'
        assert data['gemini_configured'] == True

    def test_logs(self, client, auth_headers):
        data = client.get('/api/logs?limit=1', headers=auth_headers).get_json()

        assert data['total'] == 1
        assert data['logs'][0]['msg'].startswith('Access granted to Master Admin')

    def test_clear_logs(self, client, auth_headers):
        client.delete('/api/logs', headers=auth_headers)

        assert client.get('/api/logs', headers=auth_headers).get_json()['total'] == 0

    def test_scheduler_status(self, client, auth_headers):
        assert client.get('/api/scheduler', headers=auth_headers).get_json()['auto_refresh'] == False
