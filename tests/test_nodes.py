from planegame.commands import Command
from planegame.identifiers import Category, SoundEffect
from planegame.nodes import NetworkNode, SoundNode
from planegame.protocol import GameAction, GameActionType
from planegame.scene import SceneNode
from planegame.utility import Vector


class FakeSoundPlayer:
    def __init__(self):
        self.played = []

    def play(self, effect, position):
        self.played.append((effect, position))


def test_network_node_queues_actions_in_order():
    node = NetworkNode()
    node.notify_game_action(GameActionType.ENEMY_EXPLODE, (1.0, 2.0))
    node.notify_game_action(GameActionType.ENEMY_EXPLODE, Vector(3.0, 4.0))
    assert node.poll_game_action() == GameAction(GameActionType.ENEMY_EXPLODE, Vector(1.0, 2.0))
    assert node.poll_game_action() == GameAction(GameActionType.ENEMY_EXPLODE, Vector(3.0, 4.0))
    assert node.poll_game_action() is None


def test_network_node_category():
    assert NetworkNode().get_category() == Category.NETWORK


def test_sound_node_forwards_to_player():
    player = FakeSoundPlayer()
    node = SoundNode(player)
    node.play_sound(SoundEffect.EXPLOSION1, (5.0, 6.0))
    assert player.played == [(SoundEffect.EXPLOSION1, Vector(5.0, 6.0))]
    assert node.get_category() == Category.SOUND_EFFECT


def test_sound_command_reaches_sound_node_only():
    player = FakeSoundPlayer()
    root = SceneNode()
    root.attach_child(SoundNode(player))
    root.attach_child(NetworkNode())
    command = Command(
        lambda node, dt: node.play_sound(SoundEffect.BUTTON, (0.0, 0.0)),
        Category.SOUND_EFFECT,
    )
    root.on_command(command, 0.0)
    assert player.played == [(SoundEffect.BUTTON, Vector(0.0, 0.0))]