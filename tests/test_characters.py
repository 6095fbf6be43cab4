def _create_character(client, headers, player_id, name='Thorin', character_class='Warrior'):
    return client.post(
        '/api/characters',
        json={'name': name, 'characterClass': character_class, 'playerId': player_id},
        headers=headers,
    )


def test_create_character_seeds_baseline(client, register_user, create_player):
    headers = register_user()
    player = create_player(headers)
    res = _create_character(client, headers, player['id'])
    assert res.status_code == 201
    character = res.get_json()
    assert character['playerId'] == player['id']
    assert character['characterClass'] == 'Warrior'
    assert {k: character[k] for k in (
        'level', 'strength', 'intelligence', 'dexterity', 'vitality', 'health', 'maxHealth', 'isActive'
    )} == {
        'level': 1, 'strength': 10, 'intelligence': 10, 'dexterity': 10, 'vitality': 10,
        'health': 100, 'maxHealth': 100, 'isActive': True,
    }
    assert character['experience'] == 0


def test_create_character_for_foreign_player_forbidden(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    player = create_player(alice)

    assert _create_character(client, bob, player['id']).status_code == 403
    # Non-admins cannot probe for players that do not exist
    assert _create_character(client, bob, 9999).status_code == 403
    assert _create_character(client, admin_headers, 9999).status_code == 404
    assert _create_character(client, admin_headers, player['id']).status_code == 201


def test_create_character_requires_player_id(client, register_user):
    headers = register_user()
    res = client.post('/api/characters', json={'name': 'Thorin', 'characterClass': 'Warrior'}, headers=headers)
    assert res.status_code == 400
    assert 'playerId' in res.get_json()['error']


def test_list_characters_filters(client, register_user, create_player):
    headers = register_user()
    first = create_player(headers, 'First')
    second = create_player(headers, 'Second')
    _create_character(client, headers, first['id'], 'Thorin', 'Warrior')
    _create_character(client, headers, first['id'], 'Gandalf', 'Mage')
    _create_character(client, headers, second['id'], 'Conan', 'warrior')

    res = client.get('/api/characters?characterClass=WARRIOR', headers=headers)
    assert sorted(c['name'] for c in res.get_json()) == ['Conan', 'Thorin']
    assert res.headers['X-Total-Count'] == '2'

    res = client.get(f"/api/characters?playerId={first['id']}", headers=headers)
    assert sorted(c['name'] for c in res.get_json()) == ['Gandalf', 'Thorin']

    res = client.get(f"/api/characters?playerId={first['id']}&characterClass=mage", headers=headers)
    assert [c['name'] for c in res.get_json()] == ['Gandalf']


def test_list_characters_scoped_to_caller(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    alice_player = create_player(alice)
    bob_player = create_player(bob)
    _create_character(client, alice, alice_player['id'], 'Thorin')
    _create_character(client, bob, bob_player['id'], 'Legolas', 'Ranger')

    assert [c['name'] for c in client.get('/api/characters', headers=alice).get_json()] == ['Thorin']
    assert client.get(f"/api/characters?playerId={bob_player['id']}", headers=alice).status_code == 403
    assert client.get('/api/characters', headers=admin_headers).headers['X-Total-Count'] == '2'


def test_update_character_partial(client, register_user, create_player):
    headers = register_user()
    player = create_player(headers)
    character = _create_character(client, headers, player['id']).get_json()

    res = client.put(f"/api/characters/{character['id']}", json={'strength': 25, 'isActive': False}, headers=headers)
    assert res.status_code == 204
    updated = client.get(f"/api/characters/{character['id']}", headers=headers).get_json()
    assert updated['strength'] == 25
    assert updated['isActive'] is False
    assert updated['intelligence'] == 10
    assert updated['name'] == 'Thorin'

    res = client.put(f"/api/characters/{character['id']}", json={'strength': 0}, headers=headers)
    assert res.status_code == 400


def test_character_access_by_other_user(client, register_user, admin_headers, create_player):
    alice = register_user('alice')
    bob = register_user('bob')
    player = create_player(alice)
    character = _create_character(client, alice, player['id']).get_json()
    url = f"/api/characters/{character['id']}"

    assert client.get(url, headers=bob).status_code == 403
    assert client.put(url, json={'level': 50}, headers=bob).status_code == 403
    assert client.delete(url, headers=bob).status_code == 403
    assert client.get(url, headers=admin_headers).status_code == 200
    assert client.delete(url, headers=alice).status_code == 204
    assert client.get(url, headers=alice).status_code == 404
    assert client.delete(url, headers=alice).status_code == 404
