from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from common.exceptions import AuthError, FetchError
from infrastructure.client.kiwoom import KiwoomClient


def _response(status_code=200, json_data=None, text=''):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return KiwoomClient(
        base_url='https://api.example.com/',
        api_key='key',
        api_secret='secret',
        timeout=3,
        session=session,
    )


# --- 토큰 발급 ---

def test_issue_token_posts_form_and_returns_access_token(client, session):
    session.post.return_value = _response(json_data={'access_token': 'abc', 'token_type': 'bearer'})

    assert client.issue_token() == 'abc'

    args, kwargs = session.post.call_args
    assert args[0] == 'https://api.example.com/oauth2/token'
    assert kwargs['data'] == {'grant_type': 'client_credentials', 'appkey': 'key', 'appsecret': 'secret'}
    assert kwargs['timeout'] == 3


def test_issue_token_without_access_token_raises_auth_error_with_payload(client, session):
    payload = {'return_code': 3, 'return_msg': 'invalid appkey'}
    session.post.return_value = _response(json_data=payload)

    with pytest.raises(AuthError) as exc_info:
        client.issue_token()

    assert exc_info.value.payload == payload


def test_issue_token_network_error_raises_auth_error(client, session):
    session.post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(AuthError, match="connection refused"):
        client.issue_token()


def test_issue_token_non_2xx_raises_auth_error(client, session):
    session.post.return_value = _response(status_code=500, text='Internal Server Error')

    with pytest.raises(AuthError) as exc_info:
        client.issue_token()

    assert exc_info.value.payload == 'Internal Server Error'


def test_has_credentials(session):
    assert KiwoomClient('https://x', 'key', 'secret', 1, session).has_credentials
    assert not KiwoomClient('https://x', '', 'secret', 1, session).has_credentials
    assert not KiwoomClient('https://x', 'key', '', 1, session).has_credentials


# --- 조회 ---

def test_fetch_stock_price_sends_bearer_and_api_id_headers(client, session):
    session.post.return_value = _response(json_data={'cntr_str_tm': []})

    assert client.fetch_stock_price('tok', '005930') == {'cntr_str_tm': []}

    args, kwargs = session.post.call_args
    assert args[0] == 'https://api.example.com/api/dostk/mrkcond'
    assert kwargs['json'] == {'stk_cd': '005930'}
    assert kwargs['headers']['Authorization'] == 'Bearer tok'
    assert kwargs['headers']['api-id'] == 'ka10046'
    assert kwargs['headers']['Content-Type'].startswith('application/json')
    assert kwargs['timeout'] == 3


def test_fetch_order_book_uses_order_book_api_id(client, session):
    session.post.return_value = _response(json_data={})

    client.fetch_order_book('tok', '000660')

    assert session.post.call_args.kwargs['headers']['api-id'] == 'ka10004'


def test_fetch_daily_candle_sends_base_date(client, session):
    session.post.return_value = _response(json_data={})

    client.fetch_daily_candle('tok', '005930', date(2024, 3, 15))

    args, kwargs = session.post.call_args
    assert args[0] == 'https://api.example.com/api/dostk/chart'
    assert kwargs['headers']['api-id'] == 'ka10081'
    assert kwargs['json'] == {'stk_cd': '005930', 'base_dt': '20240315', 'upd_stkpc_tp': '0'}


def test_fetch_investor_sends_date_and_query_options(client, session):
    session.post.return_value = _response(json_data={})

    client.fetch_investor('tok', '005930', date(2024, 3, 15))

    kwargs = session.post.call_args.kwargs
    assert kwargs['headers']['api-id'] == 'ka10059'
    assert kwargs['json']['dt'] == '20240315'
    assert kwargs['json']['stk_cd'] == '005930'


def test_fetch_account_uses_account_endpoint(client, session):
    session.post.return_value = _response(json_data={'acnt_nm': 'test'})

    client.fetch_account('tok')

    args, kwargs = session.post.call_args
    assert args[0] == 'https://api.example.com/api/dostk/acnt'
    assert kwargs['headers']['api-id'] == 'kt00004'


def test_fetch_non_2xx_raises_fetch_error_with_payload(client, session):
    payload = {'return_code': 8005, 'return_msg': 'token expired'}
    session.post.return_value = _response(status_code=401, json_data=payload)

    with pytest.raises(FetchError) as exc_info:
        client.fetch_stock_price('tok', '005930')

    assert exc_info.value.payload == payload


def test_fetch_timeout_raises_fetch_error(client, session):
    session.post.side_effect = requests.Timeout("read timed out")

    with pytest.raises(FetchError, match="read timed out"):
        client.fetch_daily_candle('tok', '005930')


def test_fetch_non_json_body_raises_fetch_error(client, session):
    session.post.return_value = _response(text='<html>maintenance</html>')

    with pytest.raises(FetchError):
        client.fetch_investor('tok', '005930')
