# planegame

Game logic for a vertically scrolling aircraft shooter: aircraft, projectiles,
pickups and particle trails living in a scene graph, menu widgets, a screen
stack, positional sound, and a TCP server for co-op play.

The package keeps the rules apart from drawing. Nodes and widgets draw by
calling `draw_sprite`, `draw_text` or `draw_particles` on whatever target
object they are given, so every part can be driven and inspected from plain
Python.

## Installing

```
pip install .
pip install ".[test]"   # with pytest
```

`pygame` is required; it is used by `planegame.sound` for audio output.

## What is inside

| Module | What it holds |
|--------|---------------|
| `planegame.utility` | `Vector`, `Rect` and `Transform`, `to_degree` / `to_radian`, `random_int`, `length`, `unit_vector`, `center_origin`, `key_name` |
| `planegame.identifiers` | `Category` bit flags used to address commands; `Textures`, `Shaders`, `Fonts`, `SoundEffect`, `Music`, `States`; `Key`, `EventType`, `Event` |
| `planegame.protocol` | `ServerPacketType`, `ClientPacketType`, `GameActionType`, `GameAction`, and `Packet` / `PacketReader` for the wire format |
| `planegame.commands` | `Command`, `CommandQueue` and `derived_action` |
| `planegame.resources` | `ResourceHolder`, a keyed store of resources loaded through a loader function |
| `planegame.animation` | `Animation`, a sprite-sheet frame stepper |
| `planegame.scene` | `SceneNode`, `SpriteNode`, `TextNode`, plus `collision` and `distance` |
| `planegame.entity` | `Entity`: velocity and hitpoints |
| `planegame.data` | Aircraft, projectile, pickup and particle tables and their type enums |
| `planegame.particles` | `Particle`, `ParticleNode` and `EmitterNode` |
| `planegame.nodes` | `NetworkNode` and `SoundNode` |
| `planegame.projectile`, `planegame.pickup`, `planegame.aircraft` | `Projectile`, `Pickup`, `Aircraft` |
| `planegame.keybinding` | `PlayerAction`, `KeyBinding` with presets for two players, `is_realtime_action` |
| `planegame.player` | `Player` and `MissionStatus` |
| `planegame.gui` | `Component`, `Container`, `Button`, `Label` |
| `planegame.sound` | `SoundPlayer` and `MusicPlayer` |
| `planegame.server` | `GameServer`, `RemotePeer`, `AircraftInfo` |
| `planegame.states` | `State`, `StateStack`, `StackAction` |

## Entities in brief

* The Eagle (the player's aircraft) has 100 hitpoints, fires once per second
  (faster with each fire-rate upgrade, up to level 10), spreads up to three
  bullets, and starts with two guided missiles.
* Raptors (20 HP, no guns) and Avengers (40 HP, firing every two seconds)
  follow fixed zig-zag patterns from the data tables.
* A destroyed enemy queues a pickup drop one time in three: health (+25),
  three missiles, wider spread or faster fire.
* Missiles steer towards the direction set with `Projectile.guide_towards`
  and trail smoke and propellant particles.

## Using the pieces

The scene graph is driven by commands. A command names a `Category` and an
action; each command is passed to the root node, and every node whose
category matches runs the action:

```python
from planegame.commands import Command, CommandQueue
from planegame.identifiers import Category
from planegame.scene import SceneNode

root = SceneNode(Category.NONE)
layer = SceneNode(Category.SCENE_AIR_LAYER)
root.attach_child(layer)

queue = CommandQueue()
queue.push(Command(lambda node, dt: print("air layer reached"), Category.SCENE_AIR_LAYER))
while queue:
    root.on_command(queue.pop(), 1 / 60)
```

Screens live on a `StateStack`. States are registered with
`register_state(state_id, factory, *args)`; pushes, pops and clears requested
while a state is updating or handling an event are applied afterwards, so a
state can safely pop itself.

Packets are written and read with typed big-endian methods
(`write_int32`, `write_float`, `write_bool`, `write_string` and their
`read_` counterparts). `Packet.to_frame()` prefixes the length, and
`PacketReader.feed()` reassembles whole packets from a byte stream.

## The server

`GameServer(battlefield_size, port=5000)` listens on TCP once `start()` is
called and runs its loop in a background thread until `stop()`; it can also
be used as a context manager. It accepts up to ten players, spawns an
aircraft for each, grants a co-op partner on request, relays player events
and realtime input changes, scrolls its battlefield at 50 units per second
over a 5000-unit world, orders enemy spawns, and announces mission success
once every known aircraft has reached the top.

## What the package does not do

There is no game world object tying the entities together: nothing here
scrolls a view, spawns enemies from a spawn list, resolves collisions between
aircraft, projectiles and pickups, or guides missiles to the nearest enemy on
its own. There is no window, renderer or main loop, no concrete title, menu,
game or pause screens, and no command to start the game. The pieces above are
the building blocks such a program would use.

## Tests

```
pytest
```