from collections import Counter

import pytest

from space_invaders_sim.entities import (
    BOTTOM_TIER,
    MIDDLE_TIER,
    TOP_TIER,
    Enemy,
    InputState,
    Player,
    PowerUp,
    PowerUpKind,
    Projectile,
    tier_for_row,
)

FIRE = InputState(fire=True)
IDLE = InputState()


def make_player(**kwargs):
    return Player(start_x=400, start_y=550, canvas_width=800, **kwargs)


class TestProjectile:
    def test_player_bullet_moves_up(self):
        b = Projectile(x=10, y=100, speed=8, owner="player")
        b.advance()
        assert b.y == 92

    def test_enemy_bullet_moves_down(self):
        b = Projectile(x=10, y=100, speed=3.5, owner="enemy")
        b.advance()
        assert b.y == 103.5

    def test_off_screen(self):
        assert Projectile(x=0, y=-1, speed=1).is_off_screen(600)
        assert Projectile(x=0, y=601, speed=1).is_off_screen(600)
        assert not Projectile(x=0, y=0, speed=1).is_off_screen(600)
        assert not Projectile(x=0, y=600, speed=1).is_off_screen(600)

    def test_bounding_box_is_centered(self):
        box = Projectile(x=10, y=20, speed=1).bounding_box()
        assert (box.x, box.y, box.width, box.height) == (8, 15, 4, 10)


class TestEnemy:
    @pytest.mark.parametrize(
        "row, tier",
        [(0, TOP_TIER), (1, MIDDLE_TIER), (2, MIDDLE_TIER), (3, BOTTOM_TIER), (4, BOTTOM_TIER)],
    )
    def test_tier_follows_row(self, row, tier):
        enemy = Enemy(start_x=0, start_y=0, row=row)
        assert tier_for_row(row) is tier
        assert (enemy.width, enemy.height) == tier.size
        assert enemy.points == tier.points
        assert enemy.speed == tier.speed

    def test_top_row_is_worth_most(self):
        assert TOP_TIER.points > MIDDLE_TIER.points > BOTTOM_TIER.points
        assert TOP_TIER.speed > MIDDLE_TIER.speed > BOTTOM_TIER.speed

    def test_advance(self):
        enemy = Enemy(start_x=100, start_y=100, row=0)
        enemy.advance(-1.2, 20)
        assert enemy.x == pytest.approx(98.8)
        assert enemy.y == 120

    def test_inactive_enemy_does_not_move(self):
        enemy = Enemy(start_x=100, start_y=100, row=0)
        enemy.active = False
        enemy.advance(1, 20)
        assert (enemy.x, enemy.y) == (100, 100)

    def test_only_fire_eligible_enemy_shoots(self):
        shooter = Enemy(start_x=100, start_y=300, row=4, can_shoot=True)
        bullet = shooter.shoot(3.5)
        assert bullet.owner == "enemy"
        assert (bullet.x, bullet.y, bullet.speed) == (100, 320, 3.5)

        assert Enemy(start_x=100, start_y=100, row=0).shoot(3.5) is None
        shooter.active = False
        assert shooter.shoot(3.5) is None

    def test_reset(self):
        enemy = Enemy(start_x=100, start_y=100, row=1)
        enemy.advance(1, 20)
        enemy.active = False
        enemy.reset()
        assert (enemy.x, enemy.y, enemy.active) == (100, 100, True)


class TestPowerUp:
    def test_falls(self):
        p = PowerUp(x=10, y=10, kind=PowerUpKind.SHIELD)
        p.advance()
        assert p.y == 12

    def test_off_screen_once_fully_below(self):
        p = PowerUp(x=10, y=630, kind=PowerUpKind.SHIELD)
        assert not p.is_off_screen(600)
        p.y = 631
        assert p.is_off_screen(600)

    def test_kind_distribution_is_uniform(self, rng):
        n = 10_000
        counts = Counter(PowerUp.spawn(0, 0, rng).kind for _ in range(n))
        assert set(counts) == set(PowerUpKind)
        for kind in PowerUpKind:
            assert counts[kind] / n == pytest.approx(1 / 3, abs=0.05)


class TestPlayer:
    def test_defaults(self):
        player = make_player()
        assert (player.x, player.y, player.lives) == (400, 550, 3)
        assert player.shoot_cooldown_time == 15

    def test_movement_is_clamped(self):
        player = make_player()
        for _ in range(100):
            player.advance(InputState(left=True))
        assert player.x == 25

        for _ in range(200):
            player.advance(InputState(right=True))
        assert player.x == 775

    def test_fire_cooldown(self):
        player = make_player()
        for _ in range(15):
            player.advance(FIRE)
        assert len(player.bullets) == 1

        player.advance(FIRE)
        assert len(player.bullets) == 2

    def test_bullets_fly_with_the_player(self):
        player = make_player()
        player.advance(FIRE)
        assert player.bullets[0].y == 542

    def test_multi_shot_fires_three(self):
        player = make_player()
        player.activate_power_up(PowerUpKind.MULTI_SHOT)
        player.shoot()
        assert sorted(b.x for b in player.bullets) == [385, 400, 415]

    def test_multi_shot_and_rapid_fire_compose(self):
        player = make_player()
        player.activate_power_up(PowerUpKind.MULTI_SHOT)
        player.activate_power_up(PowerUpKind.RAPID_FIRE)
        assert player.shoot_cooldown_time == 15 // 3

        player.advance(FIRE)
        assert len(player.bullets) == 3

        for _ in range(4):
            player.advance(FIRE)
        assert len(player.bullets) == 3

        player.advance(FIRE)  # fifth frame after the first shot
        assert len(player.bullets) == 6

        for _ in range(5):
            player.advance(FIRE)
        assert len(player.bullets) == 9

    def test_rapid_fire_expires_and_restores_cooldown(self):
        player = make_player(power_up_duration=3)
        player.activate_power_up(PowerUpKind.RAPID_FIRE)
        for _ in range(2):
            player.advance(IDLE)
        assert player.rapid_fire

        player.advance(IDLE)
        assert not player.rapid_fire
        assert player.shoot_cooldown_time == 15

    def test_timers_are_independent(self):
        player = make_player(power_up_duration=5)
        player.activate_power_up(PowerUpKind.SHIELD)
        for _ in range(3):
            player.advance(IDLE)
        player.activate_power_up(PowerUpKind.MULTI_SHOT)
        for _ in range(2):
            player.advance(IDLE)

        assert not player.shield
        assert player.multi_shot
        assert player.multi_shot_timer == 3

    def test_recollecting_refreshes_timer(self):
        player = make_player()
        player.activate_power_up(PowerUpKind.SHIELD)
        for _ in range(100):
            player.advance(IDLE)
        assert player.shield_timer == 500

        player.activate_power_up("shield")
        assert player.shield_timer == 600

    def test_shield_absorbs_exactly_one_hit(self):
        player = make_player()
        player.activate_power_up(PowerUpKind.SHIELD)

        assert player.take_damage() is False
        assert not player.shield
        assert player.shield_timer == 0
        assert player.lives == 3

        assert player.take_damage() is True
        assert player.lives == 2

    def test_lives_never_go_negative(self):
        player = make_player(max_lives=1)
        player.take_damage()
        player.take_damage()
        assert player.lives == 0

    def test_reset(self):
        player = make_player()
        player.activate_power_up(PowerUpKind.RAPID_FIRE)
        player.advance(InputState(left=True, fire=True))
        player.take_damage()
        player.reset()

        assert (player.x, player.lives, player.bullets) == (400, 3, [])
        assert not player.rapid_fire
        assert player.shoot_cooldown_time == 15
