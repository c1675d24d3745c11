# v2vguard

v2vguard is a small vehicle-to-vehicle collision avoidance stack for a
Linux single-board computer. It keeps a short history of the vehicle's
own sensor readings, exchanges position frames with nearby vehicles
through exchange files and an SPI link, and evaluates a set of driver
warning features.

## Installation

```
pip install .
```

The only third-party dependency is `pyserial`, used to read the GPS
receiver. The IMU needs an I2C bus device and the SPI link needs a
spidev device node.

## Running

```
v2vguard
```

The command opens the GPS serial port, the MPU-6050 on the I2C bus and
the SPI device, then starts two background threads: one sampling the
sensors (`SensorManager.update_sensors_data`) and one running the
warning features (`FeatureManager.run_features`). It prints
`Press Enter to exit.` and stops the threads when Enter is pressed.
If any device cannot be opened it reports the error and exits with
status 1.

Options:

| option | default |
| --- | --- |
| `--gps-device` | `/dev/ttyS0` |
| `--gps-baudrate` | `9600` |
| `--i2c-device` | `/dev/i2c-1` |
| `--imu-address` | `0x68` (any integer literal, e.g. `104` or `0x68`) |
| `--spi-device` | `/dev/spidev0.0` |
| `--base-dir` | `/V2V_APP`, the directory of the exchange files |

## Modules

- `v2vguard.geo`: haversine `distance` in metres, `calculate_heading`,
  `calculate_bearing`, `calculate_heading_difference`,
  `is_ahead_and_same_direction`, `is_ahead_and_opposite_direction` and
  `determine_relative_position` (True when a point lies to the right of
  a track). Latitudes and longitudes are in degrees.
- `v2vguard.config`: the frozen record types `GPSData`, `IMUData`,
  `USData`, `ENData` and `Vehicle`, the history lengths, the ultrasonic
  pin map and `latest(readings, offset)`, which raises `IndexError` for
  an offset outside the history.
- `v2vguard.shared_files`: `read_data_from_file` (reads and empties a
  file under an exclusive `flock`, returning `b""` if it cannot be
  opened), `append_data_to_file`, the `file_lock` context manager and
  `time_difference_in_seconds` for `HH:MM:SS` strings.
- Drivers: `gps_interface` (`parse_gps` for `$GPGGA` sentences and
  `GPSInterface`), `imu_interface` (`MPU6050`, `open_i2c_bus`),
  `encoder` (`Encoder`, counting quadrature edges fed to `on_edge`) and
  `ultrasonic` (`UltrasonicSensor`, driven through a GPIO controller
  object you supply).
- `v2vguard.sensors` and `v2vguard.sensor_manager`: thread-safe reading
  histories (`EN`, `GPS`, `IMU`, `US`) and the `SensorManager` that owns
  them.
- `v2vguard.spi`: `SPI`, which sends the queued outbound files over SPI
  and appends the radio's reply to the inbound file.
- `v2vguard.comm_manager`: frame encoding and parsing and
  `CommManager`, which keeps the `{mac: {time: Vehicle}}` table of
  nearby vehicles.
- Features: `bsw.BSW`, `fcw.FCW`, `eebl.EEBL`, `dnpw.DNPW`, `ima.IMA`,
  all run together by `feature_manager.FeatureManager`.

## Warning features

- **BSW** (blind spot warning): averages the rear-left and rear-right
  ultrasonic readings; `run_controller()` returns `1` (right), `2`
  (left), `3` (both) or `0`, with a 20 cm threshold on each side.
- **FCW** (forward collision warning): averages the front ultrasonic
  readings; `run_controller(now)` is True when the average is below
  15 cm and it dropped by more than 50 since the previous run.
- **EEBL** (emergency electronic brake light): True when a vehicle ahead
  in the same direction reports `acc_y` below -20 or a speed differing
  from ours by more than 30.
- **DNPW** (do not pass warning): `run_status_front()` looks for a slow
  vehicle close ahead, `run_status_cross()` for oncoming traffic. The
  vehicle table is rescanned on the first call and then once every
  40000 calls.
- **IMA** (intersection movement assist): `run_controller1()` finds
  vehicles within 100 m and 5 m of altitude crossing from the left or
  right; `run_controller2()` returns the nearest one as an `IMACar`, and
  raises `LookupError` if none was ever found.

Vehicles with fewer than two reports have no known heading and are
skipped by EEBL and IMA.

## Frames

Vehicles exchange frames delimited by `@@@` and `%%%`:

```
@@@<mac>,<latitude>,<longitude>,<altitude>,<HH:MM:SS>,<acc_x>,<acc_y>,<acc_z>,<speed>%%%
```

```python
from v2vguard.comm_manager import encode_frame, parse_frames
from v2vguard.config import ENData, GPSData, IMUData

frame = encode_frame(
    "02:00:00:00:00:01",
    GPSData(30.0444, 31.2357, 20.0, "12:00:00"),
    IMUData(0.1, 0.2, 9.8),
    ENData(1.5),
)
# b"@@@02:00:00:00:00:01,30.0444,31.2357,20,12:00:00,0.1,0.2,9.8,1.5%%%"
mac, time, vehicle = parse_frames(frame)[0]
```

Numeric fields that cannot be read become `0.0` (see `safe_stod`).
`CommManager.delete_idle_vehicles` drops entries whose MAC is not 17
characters long or whose last report is 10 or more seconds before the
fixed reference time `22:19:50`.

## Library use

```python
from v2vguard.bsw import BSW
from v2vguard.config import USData
from v2vguard.geo import calculate_heading, distance

metres = distance(30.0444, 31.2357, 30.0450, 31.2357)
heading = calculate_heading(30.0444, 31.2357, 30.0450, 31.2357)  # degrees in [0, 360)

bsw = BSW()
bsw.update_us_rl_data([USData(30.0)] * 5)
bsw.update_us_rr_data([USData(10.0)] * 5)
bsw.run_controller()  # 1: a vehicle on the right
```

Every sampling and exchange loop has a single-step form
(`SensorManager.update_once`, `CommManager.send_frame_esp_once`,
`CommManager.receive_frame_esp_once`, `FeatureManager.run_once`) and a
looping form that takes a `threading.Event` to stop it.

## What it does not do

- The `v2vguard` command does not start the frame exchange:
  `CommManager.send_frame_esp` and `receive_frame_esp` are not run by
  it, so the vehicle table stays empty unless you run them yourself.
- The command does not poll the ultrasonic sensors; each reports 0 cm.
  The rear-left and rear-right histories start from fixed preset
  readings.
- `SensorManager.update_once` samples the encoder, the IMU and the
  ultrasonic sensors but not the GPS, so the GPS history keeps its
  initial entries.
- Nothing connects `Encoder.on_edge` to GPIO interrupts; without edges
  fed in, the measured speed is 0.
- Chip-select lines are left to the spidev driver; the pin numbers are
  only passed to the transfer function.

## Tests

```
pip install .[test]
pytest
```