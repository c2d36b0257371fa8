import unittest

from game import (
    Board,
    Card,
    Check,
    ChoosePlayer,
    EndOfGame,
    FixedCardGenerator,
    Game,
    Play,
    Player,
    RandomCardGenerator,
    Register,
    RulesImpl,
    SelectCard,
    WaitingForCards,
    WaitingForPlayers,
    WaitingForPlayerToPlay,
    captures,
    decide_winner,
    execute,
    LEFT,
    RIGHT,
    UP,
    DOWN,
)


def card(cid, top, right, bottom, left):
    return Card(id=cid, top=top, right=right, bottom=bottom, left=left)


def deck(prefix, value=5):
    return [card(f"{prefix}{i}", value, value, value, value) for i in range(10)]


def registered(rules, first="Player 1", second="Player 2"):
    g = execute(rules, Game.new(), Register(first))
    return execute(rules, g, Register(second))


def playing_game(board, to_move, hand1=(), hand2=()):
    players = (Player("Player 1", tuple(hand1)), Player("Player 2", tuple(hand2)))
    return Game(WaitingForPlayerToPlay(to_move), players, board)


class TestRegistration(unittest.TestCase):
    def setUp(self):
        self.rules = RulesImpl(RandomCardGenerator(seed=3))

    def test_given_new_game_when_created_then_waiting_for_two_players(self):
        g = Game.new()
        self.assertEqual(g.state, WaitingForPlayers(2))
        self.assertEqual(g.players, ())
        self.assertEqual(g.board, Board())
        self.assertFalse(g.is_over())

    def test_given_one_registration_when_pushed_then_waiting_for_one_player(self):
        g = execute(self.rules, Game.new(), Register("Player 1"))
        self.assertEqual(g.state, WaitingForPlayers(1))
        self.assertEqual(g.players, (Player("Player 1"),))

    def test_given_two_registrations_when_pushed_then_waiting_for_cards_with_fresh_deck(self):
        g = registered(self.rules)
        self.assertIsInstance(g.state, WaitingForCards)
        self.assertEqual(g.state.player_count, 2)
        self.assertEqual(len(g.state.deck), 10)
        self.assertEqual([p.name for p in g.players], ["Player 1", "Player 2"])
        self.assertEqual(g.players[1].hand, ())

    def test_given_duplicate_name_when_registering_then_no_op(self):
        g = execute(self.rules, Game.new(), Register("Player 1"))
        g2 = execute(self.rules, g, Register("Player 1"))
        self.assertIs(g2, g)
        self.assertEqual(g2.state, WaitingForPlayers(1))
        self.assertEqual(g2.players, (Player("Player 1"),))

    def test_given_waiting_for_players_when_other_commands_then_ignored(self):
        g = execute(self.rules, Game.new(), Register("Player 1"))
        for command in [ChoosePlayer(), SelectCard("x"), Play("x", 0, 0), Check(0, 0)]:
            self.assertIs(execute(self.rules, g, command), g)


class TestDrafting(unittest.TestCase):
    def setUp(self):
        self.deck_a = deck("a")
        self.deck_b = deck("b")
        self.deck_c = deck("c")
        self.rules = RulesImpl(FixedCardGenerator([self.deck_a, self.deck_b, self.deck_c]))
        self.game = registered(self.rules)

    def test_given_first_pick_when_selecting_then_card_moves_to_first_hand(self):
        g = execute(self.rules, self.game, SelectCard("a3"))
        self.assertEqual(g.players[0].hand, (self.deck_a[3],))
        self.assertEqual(g.state.player_count, 2)
        self.assertEqual(len(g.state.deck), 9)
        self.assertNotIn(self.deck_a[3], g.state.deck)
        # input untouched
        self.assertEqual(len(self.game.state.deck), 10)
        self.assertEqual(self.game.players[0].hand, ())

    def test_given_unknown_card_when_selecting_then_hand_and_deck_unchanged(self):
        g = execute(self.rules, self.game, SelectCard("nope"))
        self.assertEqual(g.players[0].hand, ())
        self.assertEqual(g.state, self.game.state)

    def test_given_fifth_pick_when_first_drafter_then_fresh_deck_for_second(self):
        g = self.game
        for i in range(5):
            g = execute(self.rules, g, SelectCard(f"a{i}"))
        self.assertEqual(len(g.players[0].hand), 5)
        self.assertEqual(g.state, WaitingForCards(1, tuple(self.deck_b)))

    def test_given_fifth_pick_when_last_drafter_then_first_player_to_play(self):
        g = self.game
        for i in range(5):
            g = execute(self.rules, g, SelectCard(f"a{i}"))
        for i in range(5):
            g = execute(self.rules, g, SelectCard(f"b{i}"))
        self.assertEqual(g.state, WaitingForPlayerToPlay("Player 1"))
        self.assertEqual(len(g.players[1].hand), 5)
        self.assertEqual([c.id for c in g.players[1].hand], [f"b{i}" for i in range(5)])

    def test_given_drafting_when_other_commands_then_ignored(self):
        for command in [Register("Player 3"), ChoosePlayer(), Play("a0", 0, 0)]:
            self.assertIs(execute(self.rules, self.game, command), self.game)


class TestCapture(unittest.TestCase):
    def setUp(self):
        self.rules = RulesImpl(FixedCardGenerator([deck("z")]))
        self.p1 = Player("Player 1")
        self.five = card("five", 5, 5, 5, 5)

    def test_given_neighbor_on_left_with_weaker_right_edge_when_played_then_captured(self):
        board = Board().set_card_at(self.p1, card("n", 1, 4, 2, 3), 0, 0)
        g = playing_game(board, "Player 2", hand1=[card("h1", 1, 1, 1, 1)], hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 1, 0))
        self.assertEqual(g2.board.get_card_at(0, 1), self.five)
        self.assertEqual(g2.board.get_cell_owner(0, 1), "Player 2")
        self.assertEqual(g2.board.get_cell_owner(0, 0), "Player 2")
        self.assertEqual(g2.board.get_card_at(0, 0), card("n", 1, 4, 2, 3))
        self.assertEqual(g2.players[1].hand, ())
        self.assertEqual(g2.state, WaitingForPlayerToPlay("Player 1"))

    def test_given_neighbor_on_right_when_played_then_right_edge_against_left_edge(self):
        board = Board().set_card_at(self.p1, card("n", 9, 9, 9, 4), 0, 1)
        g = playing_game(board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 0, 0))
        self.assertEqual(g2.board.get_cell_owner(0, 1), "Player 2")

    def test_given_neighbor_above_when_played_then_top_edge_against_bottom_edge(self):
        board = Board().set_card_at(self.p1, card("n", 9, 9, 4, 9), 0, 0)
        g = playing_game(board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 0, 1))
        self.assertEqual(g2.board.get_cell_owner(0, 0), "Player 2")

    def test_given_neighbor_below_when_played_then_bottom_edge_against_top_edge(self):
        board = Board().set_card_at(self.p1, card("n", 4, 9, 9, 9), 2, 2)
        g = playing_game(board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 2, 1))
        self.assertEqual(g2.board.get_cell_owner(2, 2), "Player 2")

    def test_given_equal_or_stronger_facing_edges_when_played_then_no_capture(self):
        board = Board()
        board = board.set_card_at(self.p1, card("l", 1, 5, 1, 1), 1, 0)  # right edge 5 == 5
        board = board.set_card_at(self.p1, card("r", 1, 1, 1, 6), 1, 2)  # left edge 6 > 5
        board = board.set_card_at(self.p1, card("u", 1, 1, 5, 1), 0, 1)  # bottom edge 5 == 5
        board = board.set_card_at(self.p1, card("d", 9, 1, 1, 1), 2, 1)  # top edge 9 > 5
        g = playing_game(board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 1, 1))
        for (r, c) in [(1, 0), (1, 2), (0, 1), (2, 1)]:
            self.assertEqual(g2.board.get_cell_owner(r, c), "Player 1")
        self.assertEqual(g2.board.get_cell_owner(1, 1), "Player 2")

    def test_given_diagonal_card_when_played_then_never_compared(self):
        board = Board().set_card_at(self.p1, card("diag", 1, 1, 1, 1), 0, 0)
        g = playing_game(board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 1, 1))
        self.assertEqual(g2.board.get_cell_owner(0, 0), "Player 1")

    def test_given_captured_card_when_its_neighbors_are_weaker_then_no_chain(self):
        board = Board()
        p2 = Player("Player 2")
        # Player 2 owns a weak card at (0,1) and another at (0,0); the first is next to the play.
        board = board.set_card_at(p2, card("mid", 1, 1, 1, 1), 0, 1)
        board = board.set_card_at(p2, card("far", 1, 1, 1, 1), 0, 0)
        strong = card("strong", 1, 1, 1, 9)
        g = playing_game(board, "Player 1", hand1=[strong])
        g2 = execute(self.rules, g, Play("strong", 2, 0))
        self.assertEqual(g2.board.get_cell_owner(0, 1), "Player 1")
        self.assertEqual(g2.board.get_cell_owner(0, 0), "Player 2")

    def test_given_own_neighbor_when_played_then_ownership_stays(self):
        board = Board().set_card_at(self.p1, card("mine", 1, 1, 1, 1), 0, 0)
        g = playing_game(board, "Player 1", hand1=[self.five])
        g2 = execute(self.rules, g, Play("five", 1, 0))
        self.assertEqual(g2.board.get_cell_owner(0, 0), "Player 1")
        self.assertEqual(g2.state, WaitingForPlayerToPlay("Player 2"))

    def test_given_edge_pairs_when_comparing_then_strictly_greater_wins(self):
        a = card("a", 6, 6, 6, 6)
        b = card("b", 6, 5, 7, 6)
        self.assertTrue(captures(a, b, LEFT))    # 6 > b.right 5
        self.assertFalse(captures(a, b, RIGHT))  # 6 > b.left 6 is false
        self.assertFalse(captures(a, b, UP))     # 6 > b.bottom 7 is false
        self.assertFalse(captures(a, b, DOWN))   # 6 > b.top 6 is false


class TestPlayRejections(unittest.TestCase):
    def setUp(self):
        self.rules = RulesImpl(FixedCardGenerator([deck("z")]))
        self.p1 = Player("Player 1")
        self.five = card("five", 5, 5, 5, 5)
        self.board = Board().set_card_at(self.p1, card("n", 1, 1, 1, 1), 1, 1)

    def test_given_occupied_cell_when_played_then_rejected_and_card_stays_in_hand(self):
        g = playing_game(self.board, "Player 2", hand2=[self.five])
        g2 = execute(self.rules, g, Play("five", 1, 1))
        self.assertIs(g2, g)
        self.assertEqual(g2.players[1].hand, (self.five,))
        self.assertEqual(g2.board.get_cell_owner(1, 1), "Player 1")
        self.assertEqual(g2.state, WaitingForPlayerToPlay("Player 2"))

    def test_given_target_outside_grid_when_played_then_rejected(self):
        g = playing_game(self.board, "Player 2", hand2=[self.five])
        for (x, y) in [(3, 0), (0, 3), (-1, 1), (1, -1)]:
            self.assertIs(execute(self.rules, g, Play("five", x, y)), g)

    def test_given_card_not_in_hand_when_played_then_rejected(self):
        g = playing_game(self.board, "Player 2", hand1=[self.five])
        self.assertIs(execute(self.rules, g, Play("five", 0, 0)), g)

    def test_given_unknown_player_to_move_when_played_then_rejected(self):
        g = playing_game(self.board, "Nobody", hand2=[self.five])
        self.assertIs(execute(self.rules, g, Play("five", 0, 0)), g)

    def test_given_play_phase_when_other_commands_then_ignored(self):
        g = playing_game(self.board, "Player 2", hand2=[self.five])
        for command in [Register("Player 3"), SelectCard("five"), ChoosePlayer(), Check(1, 1)]:
            self.assertIs(execute(self.rules, g, command), g)


class TestEndOfGame(unittest.TestCase):
    def setUp(self):
        self.rules = RulesImpl(FixedCardGenerator([deck("z")]))
        self.p1 = Player("Player 1")
        self.p2 = Player("Player 2")

    def _board_missing_center(self):
        board = Board()
        for i, (r, c) in enumerate([(0, 0), (0, 2), (2, 0), (2, 2)]):
            board = board.set_card_at(self.p1, card(f"corner{i}", 1, 1, 1, 1), r, c)
        for i, (r, c) in enumerate([(0, 1), (1, 0), (1, 2), (2, 1)]):
            board = board.set_card_at(self.p2, card(f"edge{i}", 1, 1, 1, 1), r, c)
        return board

    def test_given_last_cell_when_strong_card_captures_all_then_end_with_winner(self):
        strong = card("strong", 9, 9, 9, 9)
        g = playing_game(self._board_missing_center(), "Player 1", hand1=[strong])
        g2 = execute(self.rules, g, Play("strong", 1, 1))
        self.assertTrue(g2.board.is_full())
        self.assertEqual(g2.state, EndOfGame((9, 0), "Player 1"))
        self.assertTrue(g2.is_over())

    def test_given_last_cell_when_no_capture_then_player_with_more_cells_wins(self):
        weak = card("weak", 1, 1, 1, 1)
        g = playing_game(self._board_missing_center(), "Player 2", hand2=[weak])
        g2 = execute(self.rules, g, Play("weak", 1, 1))
        self.assertEqual(g2.state, EndOfGame((4, 5), "Player 2"))

    def test_given_end_of_game_when_any_command_then_terminal(self):
        g = Game(EndOfGame((5, 4), "Player 1"), (self.p1, self.p2), self._board_missing_center())
        for command in [Register("x"), SelectCard("x"), Play("x", 1, 1), ChoosePlayer(), Check(0, 0)]:
            self.assertIs(execute(self.rules, g, command), g)

    def test_given_scores_when_deciding_winner_then_tie_has_no_winner(self):
        players = (self.p1, self.p2)
        self.assertEqual(decide_winner(players, (5, 4)), "Player 1")
        self.assertEqual(decide_winner(players, (4, 5)), "Player 2")
        self.assertIsNone(decide_winner(players, (4, 4)))


class TestFullGame(unittest.TestCase):
    def test_given_fixed_decks_when_playing_whole_game_then_turns_alternate_and_game_ends(self):
        # Player 1 drafts strong cards, Player 2 weak ones.
        rules = RulesImpl(FixedCardGenerator([deck("a", 7), deck("b", 2)]))
        g = registered(rules)
        for i in range(5):
            g = execute(rules, g, SelectCard(f"a{i}"))
        for i in range(5):
            g = execute(rules, g, SelectCard(f"b{i}"))

        cells = [(x, y) for y in range(3) for x in range(3)]
        expected_turn = "Player 1"
        for n, (x, y) in enumerate(cells):
            self.assertEqual(g.state, WaitingForPlayerToPlay(expected_turn))
            player = g.find_player(expected_turn)
            g = execute(rules, g, Play(player.hand[0].id, x, y))
            expected_turn = "Player 2" if expected_turn == "Player 1" else "Player 1"

        self.assertIsInstance(g.state, EndOfGame)
        self.assertEqual(sum(g.state.scores), 9)
        self.assertEqual(g.state.winner, "Player 1")
        self.assertEqual(len(g.players[0].hand), 0)
        self.assertEqual(len(g.players[1].hand), 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
