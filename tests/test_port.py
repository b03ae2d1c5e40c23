from dynarta import INPUT


class TestPort:

    def test_mask(self, port_board):
        port = port_board.digital_ports[0]
        for pin, value in zip(port.pins, [1, 0, 1, 0, 0, 0, 0, 1]):
            pin.value = value
        assert port.mask == 0b10000101

    def test_write(self, port_board, transport):
        port = port_board.digital_ports[0]
        for pin, value in zip(port.pins, [1, 0, 1, 0, 0, 0, 0, 1]):
            pin.value = value
        port.write()
        assert transport.take_written() == bytes([0x90, 133 & 0x7F, 133 >> 7])

    def test_mask_ignores_inputs(self, port_board):
        port = port_board.digital_ports[0]
        port.pins[0].value = 1
        port.pins[1].mode = INPUT
        port.pins[1].value = 1
        assert port.mask == 0b1

    def test_enable_reporting(self, port_board, transport):
        port = port_board.digital_ports[0]
        port.pins[2].mode = INPUT
        transport.take_written()
        port.disable_reporting()
        assert not port.pins[2].reporting
        port.enable_reporting()
        assert port.reporting
        assert port.pins[2].reporting
        assert not port.pins[3].reporting
        assert transport.take_written() == bytes([0xD0, 0, 0xD0, 1])

    def test_update(self, port_board):
        port = port_board.digital_ports[0]
        port.pins[2].mode = INPUT
        port.pins[3].mode = INPUT
        port.pins[4].value = 1
        port.update(0b00011000)
        assert port.pins[2].value == 0
        assert port.pins[3].value == 1
        # Outputs keep what was written
        assert port.pins[4].value == 1

    def test_update_without_reporting(self, port_board):
        port = port_board.digital_ports[0]
        port.pins[2].mode = INPUT
        port.disable_reporting()
        port.update(0b100)
        assert port.pins[2].value is None

    def test_partial_port(self, board):
        # Uno: pins 8-13
        assert len(board.digital_ports) == 2
        assert [p.pin_number for p in board.digital_ports[1].pins] == list(range(8, 14))
