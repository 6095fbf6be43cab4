def test_create_player_seeds_starting_stats(client, register_user):
    headers = register_user()
    res = client.post('/api/players', json={'name': 'DragonSlayer'}, headers=headers)
    assert res.status_code == 201
    player = res.get_json()
    assert res.headers['Location'].endswith(f"/api/players/{player['id']}")
    assert player['name'] == 'DragonSlayer'
    assert {k: player[k] for k in ('level', 'experience', 'gold', 'health', 'maxHealth', 'mana', 'maxMana')} == {
        'level': 1, 'experience': 0, 'gold': 100, 'health': 100, 'maxHealth': 100, 'mana': 50, 'maxMana': 50,
    }
    assert player['lastPlayed'] is None


def test_create_player_ignores_client_supplied_stats(client, register_user):
    headers = register_user()
    player = client.post('/api/players', json={'name': 'Cheater', 'gold': 99999, 'level': 90}, headers=headers).get_json()
    assert player['gold'] == 100
    assert player['level'] == 1


def test_create_player_validates_name(client, register_user):
    headers = register_user()
    res = client.post('/api/players', json={'name': 'x'}, headers=headers)
    assert res.status_code == 400
    assert 'name' in res.get_json()['error']


def test_list_players_scoped_to_owner_and_admin_sees_all(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    create_player(alice, 'AliceOne')
    create_player(alice, 'AliceTwo')
    create_player(bob, 'BobOne')

    res = client.get('/api/players', headers=alice)
    assert res.status_code == 200
    assert sorted(p['name'] for p in res.get_json()) == ['AliceOne', 'AliceTwo']
    assert res.headers['X-Total-Count'] == '2'

    res = client.get('/api/players', headers=admin_headers)
    assert res.headers['X-Total-Count'] == '3'
    assert len(res.get_json()) == 3


def test_pagination_clamps_page_and_size(client, register_user, create_player):
    headers = register_user()
    for i in range(12):
        create_player(headers, f'Hero{i:02d}')

    res = client.get('/api/players?pageSize=0', headers=headers)
    assert res.headers['X-Page-Size'] == '10'
    assert len(res.get_json()) == 10

    res = client.get('/api/players?pageSize=500', headers=headers)
    assert res.headers['X-Page-Size'] == '100'
    assert len(res.get_json()) == 12

    res = client.get('/api/players?page=0&pageSize=5', headers=headers)
    assert res.headers['X-Page'] == '1'
    assert len(res.get_json()) == 5

    res = client.get('/api/players?page=3&pageSize=5', headers=headers)
    assert res.headers['X-Total-Count'] == '12'
    assert len(res.get_json()) == 2

    res = client.get('/api/players?page=abc', headers=headers)
    assert res.status_code == 400


def test_get_player_enforces_ownership(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    player = create_player(alice)

    assert client.get(f"/api/players/{player['id']}", headers=alice).status_code == 200
    res = client.get(f"/api/players/{player['id']}", headers=bob)
    assert res.status_code == 403
    assert 'error' in res.get_json()
    assert client.get(f"/api/players/{player['id']}", headers=admin_headers).status_code == 200
    res = client.get('/api/players/9999', headers=alice)
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Player not found'}


def test_update_player_applies_only_given_fields(client, register_user, create_player):
    headers = register_user()
    player = create_player(headers, 'Before')

    res = client.put(f"/api/players/{player['id']}", json={'gold': 250}, headers=headers)
    assert res.status_code == 204
    updated = client.get(f"/api/players/{player['id']}", headers=headers).get_json()
    assert updated['gold'] == 250
    assert updated['name'] == 'Before'
    assert updated['level'] == 1
    assert updated['lastPlayed'] is not None

    res = client.put(f"/api/players/{player['id']}", json={'level': 101}, headers=headers)
    assert res.status_code == 400


def test_update_and_delete_other_users_player_forbidden(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    player = create_player(alice)

    assert client.put(f"/api/players/{player['id']}", json={'name': 'Stolen'}, headers=bob).status_code == 403
    assert client.delete(f"/api/players/{player['id']}", headers=bob).status_code == 403
    assert client.put(f"/api/players/{player['id']}", json={'name': 'Renamed'}, headers=admin_headers).status_code == 204
    assert client.get(f"/api/players/{player['id']}", headers=alice).get_json()['name'] == 'Renamed'
    assert client.delete(f"/api/players/{player['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/players/{player['id']}", headers=alice).status_code == 404


def test_delete_player_cascades_and_orphans_items(flask_app, client, register_user, create_player):
    from gameapi import db
    from gameapi.models import Character, Item, Score

    headers = register_user()
    player = create_player(headers)
    pid = player['id']
    client.post('/api/characters', json={'name': 'Thorin', 'characterClass': 'Warrior', 'playerId': pid}, headers=headers)
    client.post('/api/scores', json={'gameMode': 'Arena', 'points': 10, 'playerId': pid}, headers=headers)
    item = client.post('/api/items', json={'name': 'Sword', 'itemType': 'Weapon', 'playerId': pid}, headers=headers).get_json()

    assert client.delete(f'/api/players/{pid}', headers=headers).status_code == 204

    with flask_app.app_context():
        assert Character.query.filter_by(player_id=pid).count() == 0
        assert Score.query.filter_by(player_id=pid).count() == 0
        orphan = db.session.get(Item, item['id'])
        assert orphan.player_id is None


def test_update_player_rejects_out_of_range_gold(client, register_user, create_player):
    headers = register_user()
    player = create_player(headers)
    url = f"/api/players/{player['id']}"
    assert client.put(url, json={'gold': 2**70}, headers=headers).status_code == 400
    assert client.put(url, json={'experience': 2**31}, headers=headers).status_code == 400
    assert client.get(url, headers=headers).get_json()['gold'] == 100
