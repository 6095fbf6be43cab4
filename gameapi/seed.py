from gameapi import db
from gameapi.models import ROLE_ADMIN, ROLE_PLAYER, Character, Item, Player, User
from gameapi.services.ranking import submit_score

SEED_PASSWORD = 'password123'


def seed_database():
    """Demo users, players, characters, items and scores for the dashboard."""
    users = {}
    for username, role in (('admin', ROLE_ADMIN), ('player1', ROLE_PLAYER), ('player2', ROLE_PLAYER)):
        user = User(username=username, email=f'{username}@gameapi.com', role=role)
        user.set_password(SEED_PASSWORD)
        db.session.add(user)
        users[username] = user
    db.session.flush()

    dragon = Player(name='DragonSlayer', level=15, experience=4500, gold=2500,
                    health=150, max_health=150, mana=100, max_mana=100, user_id=users['player1'].id)
    shadow = Player(name='ShadowHunter', level=10, experience=2000, gold=1200,
                    health=120, max_health=120, mana=80, max_mana=80, user_id=users['player2'].id)
    db.session.add_all([dragon, shadow])
    db.session.flush()

    db.session.add_all([
        Character(name='Thorin', character_class='Warrior', level=15, experience=4500, strength=25,
                  intelligence=10, dexterity=15, vitality=30, health=300, max_health=300, player_id=dragon.id),
        Character(name='Gandalf', character_class='Mage', level=12, experience=3000, strength=8,
                  intelligence=35, dexterity=12, vitality=15, health=180, max_health=180, player_id=dragon.id),
        Character(name='Legolas', character_class='Ranger', level=10, experience=2000, strength=15,
                  intelligence=12, dexterity=30, vitality=20, health=220, max_health=220, player_id=shadow.id),
        Item(name='Excalibur', description='Legendary sword of immense power', item_type='Weapon',
             attack_bonus=50, defense_bonus=10, value=5000, rarity=10, is_equipped=True, player_id=dragon.id),
        Item(name='Iron Armor', description='Sturdy armor for protection', item_type='Armor',
             defense_bonus=30, value=1500, rarity=5, is_equipped=True, player_id=dragon.id),
        Item(name='Health Potion', description='Restores 50 health points', item_type='Consumable',
             value=50, rarity=2, quantity=10, player_id=dragon.id),
        Item(name='Elven Bow', description='Swift and accurate bow', item_type='Weapon',
             attack_bonus=35, value=2000, rarity=7, is_equipped=True, player_id=shadow.id),
    ])
    db.session.commit()

    # Scores go through the ranking engine so high score flags stay consistent
    submit_score(dragon.id, 'Arena', 15000, kills=50, deaths=5, time_played=3600, difficulty_level=5)
    submit_score(dragon.id, 'Dungeon', 8000, kills=30, deaths=3, time_played=2400, difficulty_level=3)
    submit_score(shadow.id, 'Arena', 12000, kills=40, deaths=8, time_played=3000, difficulty_level=4)
